"""Graph helpers built on NetworkX.

This package provides conversion between `pgraph.model.Graph` and NetworkX
multi-digraphs (`convert`) and structural summaries (`stats`).
"""
