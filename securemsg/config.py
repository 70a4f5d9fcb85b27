"""
Runtime configuration for SecureMsg.

Values are read from the environment (a local .env file is honoured).
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

MIN_RSA_KEY_SIZE = 2048


def parse_rsa_key_size(raw: Optional[str]) -> int:
    """
    Interpret an RSA_KEY_SIZE setting.
    
    Unset, non-integer and below-minimum values fall back to MIN_RSA_KEY_SIZE
    with a warning.
    
    Args:
        raw: Value from the environment, or None
    
    Returns:
        Key size in bits
    """
    if raw is None or not raw.strip():
        return MIN_RSA_KEY_SIZE
    
    try:
        key_size = int(raw)
    except ValueError:
        logger.warning(f"RSA_KEY_SIZE={raw!r} is not an integer; using {MIN_RSA_KEY_SIZE}.")
        return MIN_RSA_KEY_SIZE
    
    if key_size < MIN_RSA_KEY_SIZE:
        logger.warning(
            f"RSA_KEY_SIZE={key_size} is below the {MIN_RSA_KEY_SIZE}-bit minimum; using {MIN_RSA_KEY_SIZE}."
        )
        return MIN_RSA_KEY_SIZE
    
    return key_size


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
RSA_KEY_SIZE = parse_rsa_key_size(os.getenv("RSA_KEY_SIZE"))
CA_ISSUER_NAME = os.getenv("CA_ISSUER_NAME", "Demonstration Test CA")


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the console front end.
    
    Args:
        level: Level name (e.g. "DEBUG"); defaults to LOG_LEVEL
    """
    numeric_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
