from events import KeyEvent
from file_type_handler import SaveError
from quit_prompt import QuitPrompt
from session import GridSession
from workbook import Address, Workbook


class Persistence:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = 0

    def save(self, workbook, path):
        self.calls += 1
        if self.fail:
            raise SaveError(path, "read-only file system")


def _dirty_session(fail=False):
    book = Workbook.blank()
    book.sheet(0).set_cell(Address(1, 1), "unsaved")
    session = GridSession(book, path="book.xlsx", persistence=Persistence(fail))
    session.handle(KeyEvent.ctrl_char("w"))
    return session


def test_yes_saves_then_exits():
    session = _dirty_session()
    prompt = QuitPrompt(session)
    prompt.start()
    prompt.handle(KeyEvent.of_char("y"))
    assert prompt.exit_requested
    assert not prompt.active
    assert not session.dirty


def test_yes_with_failed_save_stays_open():
    session = _dirty_session(fail=True)
    prompt = QuitPrompt(session)
    prompt.start()
    prompt.handle(KeyEvent.of_char("y"))
    assert not prompt.exit_requested
    assert not prompt.active
    assert session.dirty
    assert not session.quit_requested
    assert session.status_message.startswith("Save failed")


def test_no_discards():
    session = _dirty_session()
    prompt = QuitPrompt(session)
    prompt.start()
    prompt.handle(KeyEvent.of_char("n"))
    assert prompt.exit_requested
    assert session.persistence.calls == 0


def test_escape_keeps_editing():
    session = _dirty_session()
    prompt = QuitPrompt(session)
    prompt.start()
    prompt.handle(KeyEvent.of_char("x"))
    assert prompt.active
    prompt.handle(KeyEvent("escape"))
    assert not prompt.active
    assert not prompt.exit_requested
    assert not session.quit_requested
    assert session.status_message == "Quit canceled"
