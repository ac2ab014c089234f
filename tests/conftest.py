import itertools
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sigmaSettings.banner.manifest import BannerMedia  # noqa: E402
from sigmaSettings.media_classifier import MediaKind  # noqa: E402


@pytest.fixture
def builtin() -> tuple[BannerMedia, ...]:
    return (
        BannerMedia("builtin1.jpg", "Builtin one"),
        BannerMedia("builtin2.jpg", "Builtin two"),
        BannerMedia("builtin3.mp4", "Builtin three", MediaKind.VIDEO),
    )


@pytest.fixture
def id_factory():
    """Deterministic custom media ids: c0000001, c0000002, ..."""

    counter = itertools.count(1)
    return lambda: f"c{next(counter):07x}"
