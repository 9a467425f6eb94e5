import pytest

from pack.utils.files import content_disposition, sanitize_file_name


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("report.pdf", "report.pdf"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\me\\cv.docx", "cv.docx"),
        ('bad"name\x00.txt', "badname.txt"),
        ("  spaced.txt  ", "spaced.txt"),
        (None, "unnamed"),
        ("", "unnamed"),
        ("..", "unnamed"),
        ("dir/", "dir"),
    ],
)
def test_sanitize_file_name(raw, expected):
    assert sanitize_file_name(raw) == expected


def test_sanitize_long_name_keeps_extension():
    name = sanitize_file_name("a" * 300 + ".pdf")
    assert len(name) == 255
    assert name.endswith(".pdf")


def test_content_disposition_ascii():
    assert content_disposition("inline", "a.pdf") == 'inline; filename="a.pdf"'


def test_content_disposition_non_ascii():
    value = content_disposition("attachment", "übung.pdf")
    assert value == "attachment; filename=\"_bung.pdf\"; filename*=UTF-8''%C3%BCbung.pdf"
