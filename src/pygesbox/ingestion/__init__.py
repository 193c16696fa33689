"""Ingestion layer.

This package turns the data source's raw JSON into validated
:class:`~pygesbox.models.Sample` objects.
"""

from pygesbox.ingestion.samples import decode_payload, parse_samples

__all__ = ["decode_payload", "parse_samples"]
