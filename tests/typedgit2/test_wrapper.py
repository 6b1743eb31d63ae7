import logging
from ctypes import c_void_p, create_string_buffer
from pathlib import Path
from unittest import mock

import pytest

from typedgit2 import exc, wrapper
from typedgit2._wrappers.native_adaptation import git_error_code


def make_native_func(name: str, result: int) -> mock.Mock:
    func = mock.Mock(return_value=result)
    func.__name__ = name
    return func


class TestLastErrorMessage:
    @pytest.mark.parametrize("testcase", ("message", "no-error", "no-message", "no-lib"))
    def test_last_error_message(self, testcase: str) -> None:
        with mock.patch.object(wrapper, "lib") as lib:
            if testcase == "message":
                lib.git_error_last.return_value.contents.message = b"BOO!"
            elif testcase == "no-error":
                lib.git_error_last.return_value = None
            elif testcase == "no-message":
                lib.git_error_last.return_value.contents.message = None

            if testcase == "no-lib":
                with mock.patch.object(wrapper, "lib", None):
                    message = wrapper.last_error_message()
            else:
                message = wrapper.last_error_message()

        if testcase == "message":
            assert message == "BOO!"
        else:
            assert message == wrapper.NO_ERROR_INFO


class TestInvoke:
    @pytest.mark.parametrize("result", (0, 1, 3))
    def test_invoke_with_return_success(self, result: int, caplog) -> None:
        func = make_native_func("git_something", result)

        with caplog.at_level(logging.DEBUG, logger="typedgit2.wrapper"):
            assert wrapper.invoke_with_return(func, "a", 2) == result

        func.assert_called_once_with("a", 2)
        assert f"git_something: ok ({result})" in caplog.text

    def test_invoke_discards_result(self) -> None:
        func = make_native_func("git_something", 5)
        assert wrapper.invoke(func) is None

    @pytest.mark.parametrize(
        "code, exc_class",
        (
            (git_error_code.ERROR, exc.GitError),
            (git_error_code.ENOTFOUND, exc.NotFoundError),
            (git_error_code.EEXISTS, exc.AlreadyExistsError),
            (git_error_code.EUSER, exc.UserError),
            (git_error_code.ITEROVER, exc.IterOverError),
        ),
    )
    def test_failure(self, code: int, exc_class: type, caplog) -> None:
        func = make_native_func("git_failing", int(code))

        with (
            mock.patch.object(wrapper, "lib") as lib,
            caplog.at_level(logging.DEBUG, logger="typedgit2.wrapper"),
            pytest.raises(exc_class) as excinfo,
        ):
            lib.git_error_last.return_value.contents.message = b"It broke."
            wrapper.invoke(func)

        assert excinfo.value.kind is exc.classify(code)
        assert excinfo.value.code == code
        assert str(excinfo.value) == "It broke."
        assert f"git_failing: failed with {excinfo.value.kind.name} ({int(code)})" in caplog.text

    def test_unknown_code(self) -> None:
        func = make_native_func("git_weird", -1000)

        with pytest.raises(exc.UnknownErrorCodeError):
            wrapper.invoke(func)

    def test_func_without_name(self) -> None:
        func = mock.Mock(spec=[], return_value=0)
        assert wrapper._func_name(func) == repr(func)


class TestEncoding:
    def test_paths(self) -> None:
        assert wrapper.encode_path("foo/bär") == "foo/bär".encode()
        assert wrapper.encode_path(b"foo") == b"foo"
        assert wrapper.encode_path(Path("foo") / "bar") == b"foo/bar"
        assert wrapper.decode_path(b"foo") == "foo"
        assert wrapper.decode_path(None) is None

    def test_text(self) -> None:
        assert wrapper.encode_text("bär") == b"b\xc3\xa4r"
        assert wrapper.encode_text(b"raw") == b"raw"
        assert wrapper.decode_text(b"b\xc3\xa4r") == "bär"
        assert wrapper.decode_text(b"\xff") == "�"
        assert wrapper.decode_text(None) is None


class TestLibraryUser:
    def test_check_pointer_ok(self) -> None:
        ptr = c_void_p(1)
        assert wrapper.LibraryUser.check_pointer(ptr, "git_func") is ptr

    def test_check_pointer_null(self) -> None:
        with (
            mock.patch.object(wrapper, "lib") as lib,
            pytest.raises(exc.GitError, match=r"git_func\(\) returned NULL") as excinfo,
        ):
            lib.git_error_last.return_value = None
            wrapper.LibraryUser.check_pointer(c_void_p(), "git_func")

        assert excinfo.value.kind is exc.ErrorKind.GENERIC

    def test_read_bytes(self) -> None:
        buf = create_string_buffer(b"Hello, world")
        assert wrapper.LibraryUser.read_bytes(buf, 5) == b"Hello"
        assert wrapper.LibraryUser.read_bytes(None, 0) == b""


class Thing(wrapper.NativeHandle):
    _libgit2_native_finalizer = "git_thing_free"


class TestNativeHandle:
    def test_from_native(self) -> None:
        native = c_void_p(1)
        thing = Thing._from_native(native)

        assert type(thing) is Thing
        assert thing._native is native
        assert "Thing" in repr(thing)

    def test_deinit(self, caplog) -> None:
        native = c_void_p(1)
        thing = Thing._from_native(native)

        with (
            mock.patch.object(wrapper, "lib") as lib,
            mock.patch.object(Thing, "_libgit2_native_finalizer", "git_thing_free"),
            caplog.at_level(logging.DEBUG, logger="typedgit2.wrapper"),
        ):
            thing.deinit()

        lib.git_thing_free.assert_called_once_with(native)
        assert "Thing: deinit" in caplog.text

    def test_context_manager(self) -> None:
        native = c_void_p(1)
        finalizer = mock.Mock()

        with mock.patch.object(Thing, "_libgit2_native_finalizer", finalizer):
            with Thing._from_native(native) as thing:
                assert thing._native is native
            finalizer.assert_called_once_with(native)

    def test_double_deinit_is_not_guarded(self) -> None:
        """Deinitializing twice is a caller error which isn’t detected.

        Against a real library this would be a double free, here it shows
        that nothing stands between the second call and the finalizer.
        """
        native = c_void_p(1)
        finalizer = mock.Mock()

        with mock.patch.object(Thing, "_libgit2_native_finalizer", finalizer):
            thing = Thing._from_native(native)
            thing.deinit()
            thing.deinit()

        assert finalizer.call_args_list == [mock.call(native), mock.call(native)]
