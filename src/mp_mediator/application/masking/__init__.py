"""Application Data Masking – sensitive fields in logs and error payloads."""
from mp_mediator.application.masking.masker import (
    MASK,
    TRUNCATED_SUFFIX,
    DataMasker,
    PayloadMasker,
    truncate,
)
from mp_mediator.application.masking.rules import MaskingRule, MaskingStrategy

__all__ = [
    "MASK",
    "TRUNCATED_SUFFIX",
    "DataMasker",
    "MaskingRule",
    "MaskingStrategy",
    "PayloadMasker",
    "truncate",
]
