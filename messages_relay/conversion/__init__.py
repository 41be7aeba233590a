"""Request rewriting steps.

Each module handles one focused rewrite of the inbound request:
- payload: read model/stream/metadata out of the JSON body
- session_metadata: inject a synthetic metadata.user_id
- headers: build the outbound header set for the backend
"""

from messages_relay.conversion.headers import ModelClass, OutboundHeaders, classify_model, transform_headers
from messages_relay.conversion.payload import PayloadView, inspect_payload
from messages_relay.conversion.session_metadata import augment_metadata, build_session_user_id

__all__ = [
    "ModelClass",
    "OutboundHeaders",
    "PayloadView",
    "augment_metadata",
    "build_session_user_id",
    "classify_model",
    "inspect_payload",
    "transform_headers",
]
