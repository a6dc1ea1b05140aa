import errno
import os

import pytest

from dynmenu.errors import FatalError, UsageError, die, format_fatal


def test_plain_message_is_unchanged():
    assert format_fatal("cannot open display", None) == "cannot open display"


def test_plain_message_ignores_error():
    err = OSError(errno.ENOMEM, "Cannot allocate memory")
    assert format_fatal("no fonts could be loaded.", err) == "no fonts could be loaded."


def test_colon_message_appends_error_text():
    err = OSError(errno.ENOMEM, "Cannot allocate memory")
    assert format_fatal("calloc:", err) == "calloc: Cannot allocate memory"


def test_colon_message_with_errno_number():
    assert format_fatal("strdup:", errno.ENOENT) == "strdup: " + os.strerror(errno.ENOENT)


def test_colon_message_without_error_stays():
    assert format_fatal("calloc:", None) == "calloc:"


def test_die_raises_fatal_error():
    with pytest.raises(FatalError) as info:
        die("cannot grab focus")
    assert str(info.value) == "cannot grab focus"
    assert info.value.status == 1


def test_die_picks_up_current_exception():
    try:
        raise OSError(errno.EACCES, "Permission denied")
    except OSError:
        with pytest.raises(FatalError) as info:
            die("pledge:")
    raised = info.value
    assert str(raised) == "pledge: Permission denied"
    assert raised.status == 1
    assert isinstance(raised.error, OSError)
    assert raised.error.errno == errno.EACCES


def test_usage_error_status_and_override():
    assert UsageError("usage").status == 2
    assert UsageError("usage", status=1).status == 1
    assert issubclass(UsageError, FatalError)