"""Upstream defaults and message id generation."""

import uuid

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_MODEL = "moonshotai/kimi-k2-instruct"
GROQ_MAX_OUTPUT_TOKENS = 16384

MESSAGE_ID_PREFIX = "msg_"
MESSAGE_ID_HEX_LENGTH = 24


def generate_message_id() -> str:
    """Return a fresh response id such as ``msg_0f1e2d3c4b5a69788796a5b4``.

    Drawn from ``uuid4`` so that concurrently running instances with no shared
    state do not collide.
    """
    return f"{MESSAGE_ID_PREFIX}{uuid.uuid4().hex[:MESSAGE_ID_HEX_LENGTH]}"
