"""
Bootstrap stages and the pipeline that chains them.
"""
from .pipeline import BootstrapPipeline
from .runner import CommandRunner

__all__ = [
    'BootstrapPipeline',
    'CommandRunner',
]
