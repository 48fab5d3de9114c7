from services.text_normalizer import normalize_text


def test_normalizes_line_endings():
    assert normalize_text("a\r\nb\rc") == "a\nb\nc"


def test_collapses_horizontal_whitespace():
    assert normalize_text("Python \t\t  Developer") == "Python Developer"


def test_strips_each_line():
    assert normalize_text("  first  \n   second ") == "first\nsecond"


def test_collapses_blank_line_runs():
    assert normalize_text("a\n\n\n\n\nb") == "a\n\nb"


def test_removes_control_characters_but_keeps_newlines():
    assert normalize_text("na\x00me\x07\nline\x1f two\x7f") == "name\nline two"


def test_removes_c1_control_characters():
    assert normalize_text("Senior\x85 Engineer\x9b\x80") == "Senior Engineer"


def test_empty_and_none_inputs():
    assert normalize_text("") == ""
    assert normalize_text(None) == ""
    assert normalize_text("   \n\n  ") == ""
