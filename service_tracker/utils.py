from pathlib import Path

def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to a bundled resource.

    Args:
        relative_path: Relative path from the package root (e.g., "resources/templates")

    Returns:
        Absolute Path object
    """
    # This file is in service_tracker/utils.py, resources live beside it
    return Path(__file__).parent.absolute() / relative_path
