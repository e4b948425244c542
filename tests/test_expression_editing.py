from expression_editing import delete_char, insert_text


def test_insert_at_cursor():
    assert insert_text("1+3", 2, 2, "2*") == ("1+2*3", 4)


def test_insert_replaces_selection():
    assert insert_text("sin(1)", 0, 3, "cos") == ("cos(1)", 3)
    assert insert_text("abc", 3, 1, "X") == ("aX", 2)


def test_insert_clamps_cursor():
    assert insert_text("12", 10, 10, "3") == ("123", 3)
    assert insert_text("", None, None, "sin(") == ("sin(", 4)


def test_delete_previous_character():
    assert delete_char("123", 2, 2) == ("13", 1)


def test_delete_selection():
    assert delete_char("12345", 1, 4) == ("15", 1)


def test_delete_at_start_is_noop():
    assert delete_char("123", 0, 0) == ("123", 0)
    assert delete_char("", 0, 0) == ("", 0)
