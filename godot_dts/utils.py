"""Utility functions for reading class descriptions and writing outputs.

This module provides the I/O collaborators of the generator: reading
descriptions from files and URLs, listing a description directory and
writing generated files.
"""

import shutil
from pathlib import Path
from typing import List, Tuple
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

DESCRIPTION_SUFFIX = ".xml"


def collation_key(name: str) -> Tuple[str, str]:
    """Case-insensitive ordering key; ties fall back to the exact name."""
    return (name.casefold(), name)


class LoaderError(Exception):
    """Custom exception for description loading errors."""

    pass


def read_description(file_path: str | Path) -> str:
    """Read the raw text of one class description file.

    Args:
        file_path: Path to the description file.

    Returns:
        The file content.

    Raises:
        FileNotFoundError: If file doesn't exist.
        LoaderError: If the file cannot be read or decoded.
    """
    file_path = Path(file_path)
    logger.debug("Reading description: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise LoaderError(f"Error reading file {file_path}: {e}") from e


def read_description_from_url(url: str, timeout: int = 30) -> str:
    """Fetch the raw text of one class description.

    Args:
        url: URL of the description.
        timeout: Request timeout in seconds.

    Returns:
        The response body.

    Raises:
        LoaderError: If the URL is invalid or the request fails.
    """
    logger.debug("Fetching description: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise LoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.text

    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise LoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise LoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise LoaderError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise LoaderError(f"Request error for URL {url}: {e}") from e


def enumerate_descriptions(directory: str | Path) -> List[Path]:
    """List every description file of a directory, sorted by name.

    Raises:
        LoaderError: If the directory does not exist or cannot be listed.
    """
    directory = Path(directory)

    if not directory.is_dir():
        raise LoaderError(f"Description directory not found: {directory}")

    try:
        paths = [p for p in directory.iterdir() if p.suffix == DESCRIPTION_SUFFIX]
    except OSError as e:
        raise LoaderError(f"Cannot list description directory {directory}: {e}") from e

    return sorted(paths, key=lambda p: collation_key(p.name))


def reset_directory(directory: str | Path) -> Path:
    """Remove a directory with all its content and create it empty again."""
    directory = Path(directory)
    if directory.exists():
        shutil.rmtree(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def write_text(file_path: str | Path, content: str) -> Path:
    """Write a generated file, creating parent directories."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content, encoding="utf-8")
    logger.debug("Wrote %s", file_path)
    return file_path
