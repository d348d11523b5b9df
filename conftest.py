"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Shared layout fixtures
"""

from __future__ import annotations

import pytest
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def sample_layout() -> dict:
    """Create a main-menu layout as the editor would send it.

    Returns:
        A raw layout mapping with background, title, button and image.
    """
    return {
        "canvasSize": {"w": 1280, "h": 720},
        "items": [
            {
                "name": "Background",
                "x": 0,
                "y": 0,
                "w": 1280,
                "h": 720,
                "fill": "#101820",
            },
            {
                "type": "TextLabel",
                "name": "Title",
                "x": 40,
                "y": 32,
                "w": 400,
                "h": 48,
                "text": "Main Menu",
                "textColor": "#FFFFFF",
                "fontSize": 32,
            },
            {
                "type": "TextButton",
                "name": "Play Button",
                "x": 40,
                "y": 120,
                "w": 240,
                "h": 56,
                "fill": "#2ECC71",
                "text": "Play",
            },
            {
                "type": "ImageLabel",
                "x": 900,
                "y": 40,
                "w": 128,
                "h": 128,
                "imageId": "rbxassetid://1818",
            },
        ],
    }
