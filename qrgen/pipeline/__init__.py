"""
Batch pipeline: row decoding, batching, per-record rendering and orchestration.

Import from the submodules directly (`qrgen.pipeline.generator`, ...).
"""
