"""pcconvert core: filter base, shared contracts, logging.

The converter and batch runner import the filters, which import this
package, so they are imported from their own modules:
``pcconvert.core.converter`` and ``pcconvert.core.pipeline_runner``.
"""

from .filter_base import BaseFilter
from .contracts import BatchReport, ConversionResult, FilterOptions
from .logging import RunContext, setup_logging

__all__ = [
    "BaseFilter",
    "BatchReport",
    "ConversionResult",
    "FilterOptions",
    "RunContext",
    "setup_logging",
]
