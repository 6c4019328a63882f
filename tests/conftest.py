from __future__ import annotations

import logging
from pathlib import Path

import pytest

from annogen.models import ClassType, EnumType, Field, Method
from tests._fixtures.catalog_builder import CatalogBuilder


@pytest.fixture
def catalog_builder(tmp_path: Path) -> CatalogBuilder:
    """Provide a catalog builder rooted at the pytest tmp_path."""
    return CatalogBuilder(tmp_path)


@pytest.fixture
def color_and_animal() -> list:
    """Bare enum ``Color`` and class ``Animal`` with a single ``Speak`` method."""
    color = EnumType(
        name="Color",
        fields=[
            Field(name="Red", type_name="Color", constant=0),
            Field(name="Green", type_name="Color", constant=1),
        ],
    )
    animal = ClassType(
        name="Animal",
        methods=[Method(name="Speak", return_type="string")],
    )
    return [color, animal]


@pytest.fixture(autouse=True)
def reset_annogen_logger():
    """Undo handlers installed by ``configure_logging`` during CLI tests."""
    yield
    logger = logging.getLogger("annogen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
