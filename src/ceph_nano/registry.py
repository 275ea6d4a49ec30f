# -*- coding: utf-8 -*-
"""Queries against the public registry hosting the cluster image."""

import logging
from typing import Optional

import requests

from .config import get_settings
from .exception import RegistryError

logger = logging.getLogger(__name__)


def count_tags(url: Optional[str] = None, timeout: float = 10) -> int:
    """
    Get the number of tags published for the cluster image repository.

    Raises:
        RegistryError: The registry cannot be reached or answered garbage.
    """
    url = url or get_settings().REGISTRY_TAGS_URL
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        count = int(response.json()["count"])
    except requests.exceptions.RequestException as e:
        raise RegistryError(url, str(e)) from e
    except (ValueError, KeyError, TypeError) as e:
        raise RegistryError(url, f"Unexpected answer ({e!r})") from e

    logger.debug(f"{url} lists {count} tags")
    return count


def page_count(count: int, page_size: Optional[int] = None) -> int:
    """Number of full pages the registry splits ``count`` tags into."""
    page_size = page_size or get_settings().REGISTRY_PAGE_SIZE
    return count // page_size
