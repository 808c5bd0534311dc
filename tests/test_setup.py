"""Basic test to verify setup is working."""

import draft_assistant.engine


def test_basic_setup() -> None:
    """Test that basic Python functionality works."""
    assert True


def test_imports() -> None:
    """Test that we can import from the draft_assistant package."""
    assert draft_assistant.engine.DraftEngine is not None
