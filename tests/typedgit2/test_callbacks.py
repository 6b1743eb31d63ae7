from ctypes import pointer
from unittest import mock

import pytest

from typedgit2 import callbacks
from typedgit2._wrappers.native_adaptation import (
    git_error_code,
    git_oid,
    git_repository_fetchhead_foreach_cb,
    git_repository_mergehead_foreach_cb,
)
from typedgit2.exc import GitError
from typedgit2.oid import Oid

HEX = "0123456789abcdef0123456789abcdef01234567"


def fake_foreach(items, native_cb, payload):
    """Iterate the way libgit2 does, stopping on the first non-zero result."""
    for item in items:
        result = native_cb(*item, payload)
        if result:
            return result
    return 0


def native_oid(hex: str = HEX):
    return pointer(git_oid.from_buffer_copy(bytes.fromhex(hex)))


class TestTrampoline:
    def test_arguments_are_converted(self) -> None:
        received = []
        user_data = object()

        def callback(*args):
            received.append(args)

        trampoline = callbacks.Trampoline(
            git_repository_fetchhead_foreach_cb,
            callback,
            (callbacks.to_path, callbacks.to_text, callbacks.to_oid, callbacks.to_bool),
            user_data,
        )
        result = trampoline.native(b"refs/heads/x", b"origin", native_oid(), 1, trampoline.payload)

        assert result == 0
        ((ref_name, remote_url, oid, is_merge, data),) = received
        assert ref_name == "refs/heads/x"
        assert remote_url == "origin"
        assert isinstance(oid, Oid)
        assert oid == HEX
        assert is_merge is True
        assert data is user_data

    def test_without_user_data(self) -> None:
        callback = mock.Mock(return_value=None)

        trampoline = callbacks.Trampoline.without_user_data(
            git_repository_mergehead_foreach_cb, callback, (callbacks.to_oid,)
        )
        trampoline.native(native_oid(), trampoline.payload)

        callback.assert_called_once_with(Oid.from_hex(HEX))

    @pytest.mark.parametrize("user_data", (None, 0, "", [1, 2]))
    def test_falsy_user_data_is_passed(self, user_data) -> None:
        callback = mock.Mock(return_value=0)

        trampoline = callbacks.Trampoline(
            git_repository_mergehead_foreach_cb, callback, (callbacks.to_oid,), user_data
        )
        trampoline.native(native_oid(), trampoline.payload)

        assert callback.call_args.args[1] is user_data

    def test_user_data_from_payload(self) -> None:
        user_data = {"seen": []}
        trampoline = callbacks.Trampoline(
            git_repository_mergehead_foreach_cb, print, (callbacks.to_oid,), user_data
        )
        assert callbacks.Trampoline.user_data_from_payload(trampoline.payload) is user_data

    def test_stops_iteration(self) -> None:
        seen = []

        def callback(oid, seen):
            seen.append(oid)
            if len(seen) == 2:
                return 3

        trampoline = callbacks.Trampoline(
            git_repository_mergehead_foreach_cb, callback, (callbacks.to_oid,), seen
        )
        items = [(native_oid(f"{i:040x}"),) for i in range(5)]

        with trampoline:
            result = fake_foreach(items, trampoline.native, trampoline.payload)

        assert result == 3
        assert seen == [Oid.from_hex(f"{i:040x}") for i in range(2)]

    def test_exception_is_raised_on_exit(self) -> None:
        def callback(oid):
            raise RuntimeError("BOO")

        trampoline = callbacks.Trampoline.without_user_data(
            git_repository_mergehead_foreach_cb, callback, (callbacks.to_oid,)
        )

        with pytest.raises(RuntimeError, match="BOO"), trampoline:
            result = trampoline.native(native_oid(), trampoline.payload)
            assert result == git_error_code.EUSER

        # Stored exceptions are raised only once.
        with trampoline:
            pass


class TestMakeTrampoline:
    def test_no_user_data(self) -> None:
        trampoline = callbacks.make_trampoline(
            git_repository_mergehead_foreach_cb, print, (callbacks.to_oid,)
        )
        assert not trampoline.pass_user_data

    def test_user_data(self) -> None:
        trampoline = callbacks.make_trampoline(
            git_repository_mergehead_foreach_cb, print, (callbacks.to_oid,), None
        )
        assert trampoline.pass_user_data


class TestInvokeForeach:
    def test_completes(self) -> None:
        callback = mock.Mock(return_value=None)
        trampoline = callbacks.make_trampoline(
            git_repository_mergehead_foreach_cb, callback, (callbacks.to_oid,)
        )

        result = callbacks.invoke_foreach(fake_foreach, trampoline, [(native_oid(),)] * 3)

        assert result == 0
        assert callback.call_count == 3

    def test_stopped(self, caplog: pytest.LogCaptureFixture) -> None:
        callback = mock.Mock(side_effect=[0, 7, 0])
        trampoline = callbacks.make_trampoline(
            git_repository_mergehead_foreach_cb, callback, (callbacks.to_oid,)
        )

        with caplog.at_level("DEBUG"):
            result = callbacks.invoke_foreach(fake_foreach, trampoline, [(native_oid(),)] * 3)

        assert result == 7
        assert callback.call_count == 2
        assert "fake_foreach: ok (7)" in caplog.text

    def test_callback_exception(self) -> None:
        callback = mock.Mock(side_effect=ValueError("nope"))
        trampoline = callbacks.make_trampoline(
            git_repository_mergehead_foreach_cb, callback, (callbacks.to_oid,)
        )

        with pytest.raises(ValueError, match="nope") as excinfo:
            callbacks.invoke_foreach(fake_foreach, trampoline, [(native_oid(),)] * 3)

        # The native call failed with GIT_EUSER which the callback’s exception
        # replaces.
        assert isinstance(excinfo.value.__context__, GitError)
        assert excinfo.value.__context__.code == git_error_code.EUSER
        assert callback.call_count == 1


class TestConverters:
    def test_to_bool(self) -> None:
        assert callbacks.to_bool(1) is True
        assert callbacks.to_bool(0) is False

    def test_to_text_none(self) -> None:
        assert callbacks.to_text(None) is None
        assert callbacks.to_path(None) is None

    def test_to_text_invalid(self) -> None:
        assert callbacks.to_text(b"\xff") == "�"
