"""Encoding and delivery of document submissions."""
from intake.submission.encoder import (
    METADATA_FIELDS,
    decode_records,
    encode_submission,
    transmitted_filename,
)
from intake.submission.gateway import GENERIC_FAILURE_MESSAGE, SubmissionGateway

__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "METADATA_FIELDS",
    "SubmissionGateway",
    "decode_records",
    "encode_submission",
    "transmitted_filename",
]
