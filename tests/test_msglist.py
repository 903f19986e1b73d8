from matcomguard.msglist import MessageList


def test_add_concatenates_in_order():
    messages = MessageList()
    messages.add("abc")
    messages.add("def")
    assert messages.text == "abc" + "def"
    assert len(messages) == len("abcdef")


def test_clear_empties_buffer():
    messages = MessageList()
    messages.add("alerta\n")
    messages.clear()
    assert messages.text == ""
    assert len(messages) == 0
    assert not messages


def test_render_empty_uses_placeholder():
    assert MessageList().render() == "» (vacío)\n"


def test_render_shows_content():
    messages = MessageList()
    messages.add("hola")
    assert messages.render() == "» hola\n"


def test_str_returns_text():
    messages = MessageList()
    messages.add("x")
    messages.add("y")
    assert str(messages) == "xy"