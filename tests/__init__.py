"""Testing entrypoint."""

from pathlib import Path

TEST_ROOT = Path(__file__).parent
PROJECT_ROOT = TEST_ROOT / ".."
TEST_DATA = TEST_ROOT / "test_data"
