import pytest

from pack.validators.config_validators import format_size_in_mb, parse_data_size


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        (0, 0),
        (2048, 2048),
        ("2048", 2048),
        ("512KB", 512 * 1024),
        ("10MB", 10 * 1024 * 1024),
        ("10mb", 10 * 1024 * 1024),
        (" 1 GB ", 1024 ** 3),
        ("7B", 7),
    ],
)
def test_parse_data_size(value, expected):
    assert parse_data_size(value) == expected


@pytest.mark.parametrize("value", ["ten MB", "10XB", "-1", -5, "1.5MB", True])
def test_parse_data_size_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_data_size(value)


def test_format_size_in_mb():
    assert format_size_in_mb(10 * 1024 * 1024) == "10.00 MB"
    assert format_size_in_mb(1536 * 1024) == "1.50 MB"
