import dataclasses

import pytest

from buildergen.fields import FieldDescriptor
from buildergen.errors import DescriptorError
from buildergen.options import GenerationOptions
from common import Settings


def test_defaults_match_documented_table() -> None:
    options = GenerationOptions()

    assert options.as_dict() == {
        "create_builder_constructor": False,
        "create_static_with_methods": True,
        "create_copy_constructor": True,
        "create_builder_getters": False,
        "create_class_getters": False,
        "create_class_setters": False,
        "format_source": True,
    }


def test_builder_chain_produces_frozen_options() -> None:
    options = (
        GenerationOptions.builder()
        .create_builder_constructor(True)
        .create_copy_constructor(False)
        .create_class_getters(True)
        .format_source(False)
        .build()
    )

    assert options.create_builder_constructor
    assert not options.create_copy_constructor
    assert options.create_class_getters
    assert not options.format_source
    assert options.create_static_with_methods
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.create_class_getters = False  # type: ignore[misc]


def test_replace_returns_modified_copy() -> None:
    original = GenerationOptions()
    changed = original.replace(create_builder_getters=True)

    assert changed.create_builder_getters
    assert not original.create_builder_getters


def test_from_settings_prefers_explicit_overrides() -> None:
    settings = Settings(create_class_setters=True, format_source=False)
    options = GenerationOptions.from_settings(settings, create_class_setters=None, create_copy_constructor=False)

    assert options.create_class_setters
    assert not options.format_source
    assert not options.create_copy_constructor


def test_field_descriptor_from_mapping() -> None:
    field = FieldDescriptor.from_mapping({"name": " total ", "type": "long"})

    assert field == FieldDescriptor("total", "long")


@pytest.mark.parametrize("data", [{"type": "int"}, {"name": "x"}, {"name": "", "type": "int"}, ["x", "int"]])
def test_field_descriptor_rejects_incomplete_entries(data) -> None:
    with pytest.raises(DescriptorError):
        FieldDescriptor.from_mapping(data)
