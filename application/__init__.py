"""Application workflows that tie the runtime and domain layers together."""

from skatmoms.application.vat_return import (
    VatReturnRequest,
    VatReturnResult,
    compute_vat_return,
    run_vat_return,
)

__all__ = [
    "VatReturnRequest",
    "VatReturnResult",
    "compute_vat_return",
    "run_vat_return",
]
