"""
Configuration management for the ACCS engine
"""

import os
import logging
from pathlib import Path
from typing import Dict, List, Union

import yaml
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Application configuration"""

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    # Logfire
    LOGFIRE_TOKEN: str = os.getenv('LOGFIRE_TOKEN', '')
    LOGFIRE_PROJECT_NAME: str = os.getenv('LOGFIRE_PROJECT_NAME', 'accs')
    LOGFIRE_ENVIRONMENT: str = os.getenv('LOGFIRE_ENVIRONMENT', 'development')

    # Promotion saturation lookback
    SATURATION_PERIOD_DAYS: int = int(os.getenv('SATURATION_PERIOD_DAYS', '90'))

    @classmethod
    def validate(cls) -> bool:
        """Validate configuration values"""
        if cls.SATURATION_PERIOD_DAYS <= 0:
            raise ValueError(
                f"SATURATION_PERIOD_DAYS must be positive, got {cls.SATURATION_PERIOD_DAYS}"
            )

        return True

    @classmethod
    def get(cls, key: str, default=None):
        """Get configuration value"""
        return getattr(cls, key, default)


def load_industry_trends(path: Union[str, Path]) -> List[Dict[str, object]]:
    """
    Load an industry trend table from YAML.

    Two layouts are accepted:

        trends:
          - format: question_talking_head
            frequency: 8200

    or a flat mapping:

        question_talking_head: 8200

    Args:
        path: Path to the YAML file

    Returns:
        List of {"format": str, "frequency": float} dicts

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has neither layout
    """
    trends_path = Path(path)

    if not trends_path.exists():
        raise FileNotFoundError(f"Industry trend file not found at {trends_path}")

    with open(trends_path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if isinstance(raw, dict) and isinstance(raw.get('trends'), list):
        entries = raw['trends']
    elif isinstance(raw, dict):
        entries = [{'format': k, 'frequency': v} for k, v in raw.items()]
    else:
        raise ValueError(f"Unrecognized industry trend layout in {trends_path}")

    trends = []
    for entry in entries:
        if not isinstance(entry, dict) or 'format' not in entry:
            raise ValueError(f"Trend entry missing 'format': {entry!r}")
        trends.append({
            'format': str(entry['format']),
            'frequency': float(entry.get('frequency', 0)),
        })

    logger.debug(f"Loaded {len(trends)} industry trends from {trends_path}")
    return trends
