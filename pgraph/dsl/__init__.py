"""YAML description format for graphs.

Parse and validate a document with `pgraph.dsl.loader.load_graph_yaml`, then
build it with `pgraph.builder.build_graph`.
"""
