import pytest

from stamp.pkg.errors import (
    MetadataTypeCastError,
    NotFoundError,
    PackageError,
    PackageExistsError,
    PackageNameError,
)


def test_not_found_error_uses_meta_file_kind():
    err = NotFoundError("package.yaml")
    assert str(err) == "package not found"
    assert err.meta_file == "package.yaml"


def test_not_found_error_kind_follows_file_name():
    err = NotFoundError("widget.yaml")
    assert str(err).startswith("widget")
    assert str(err).endswith(" not found")


def test_metadata_type_cast_error_message():
    err = MetadataTypeCastError("name", 123, "str")
    assert str(err) == "metadata invalid: 'name' should be 'str', is 'int'"
    assert err.key == "name"
    assert err.value == 123
    assert err.expected_type == "str"
    assert err.actual_type == "int"


def test_metadata_type_cast_error_is_type_error():
    err = MetadataTypeCastError("items[0]", 1, "dict")
    with pytest.raises(TypeError) as excinfo:
        raise err
    assert excinfo.value is err
    assert str(excinfo.value) == (
        "metadata invalid: 'items[0]' should be 'dict', is 'int'"
    )


def test_package_exists_error_default_message():
    assert str(PackageExistsError()) == "package already installed"


def test_package_name_error_default_message():
    err = PackageNameError()
    assert str(err) == "invalid package name"
    assert isinstance(err, ValueError)


@pytest.mark.parametrize(
    ("err", "message"),
    [
        (PackageExistsError(), "package already installed"),
        (PackageNameError(), "invalid package name"),
        (NotFoundError("package.yaml"), "package not found"),
        (
            MetadataTypeCastError("k", [], "str"),
            "metadata invalid: 'k' should be 'str', is 'list'",
        ),
    ],
)
def test_errors_share_base_class(err, message):
    with pytest.raises(PackageError) as excinfo:
        raise err
    assert excinfo.value is err
    assert str(excinfo.value) == message


def test_custom_message_overrides_default():
    assert str(PackageExistsError("already there")) == "already there"