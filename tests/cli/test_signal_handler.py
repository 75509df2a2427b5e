"""Unit tests for the signal handler module in project-tree CLI."""

import os
import signal
import sys
from unittest.mock import patch

import pytest

from project_tree.cli.signal_handler import (
    EXIT_SIGINT,
    EXIT_SIGPIPE,
    SIGPIPE,
    SignalHandler,
    discard_stdout_after_interrupt,
    setup_signal_handling,
    signal_handler,
)

requires_sigpipe = pytest.mark.skipif(SIGPIPE is None, reason="SIGPIPE is not available on this platform")


@pytest.fixture
def mock_signal():
    """Create a mock for signal.signal that reports SIG_DFL as the previous handler."""
    with patch("signal.signal", autospec=True, return_value=signal.SIG_DFL) as mock:
        yield mock


@pytest.fixture
def saved_signal_state():
    """Restore the singleton's events after a test modifies them."""
    saved = (signal_handler.sigpipe_received.is_set(), signal_handler.sigint_received.is_set())
    signal_handler.sigpipe_received.clear()
    signal_handler.sigint_received.clear()
    yield signal_handler
    for event, was_set in zip((signal_handler.sigpipe_received, signal_handler.sigint_received), saved):
        if was_set:
            event.set()
        else:
            event.clear()


def test_new_handler_has_no_signals():
    handler = SignalHandler()
    assert not handler.interrupted
    assert handler.exit_code() is None


def test_install_and_handle_sigint(mock_signal):
    """SIGINT is recorded once, then the previous handler is restored."""
    previous = object()
    mock_signal.return_value = previous
    handler = SignalHandler()
    handler.install()
    mock_signal.assert_any_call(signal.SIGINT, handler.handle)

    mock_signal.reset_mock()
    handler.handle(signal.SIGINT, None)

    assert handler.sigint_received.is_set()
    assert not handler.sigpipe_received.is_set()
    assert handler.exit_code() == EXIT_SIGINT == 130
    mock_signal.assert_called_once_with(signal.SIGINT, previous)


@requires_sigpipe
def test_handle_sigpipe(mock_signal):
    handler = SignalHandler()
    handler.install()
    handler.handle(SIGPIPE, None)

    assert handler.sigpipe_received.is_set()
    assert handler.interrupted
    assert handler.exit_code() == EXIT_SIGPIPE == 141


def test_handle_without_install_restores_default(mock_signal):
    """A previous handler that Python cannot express (None) becomes SIG_DFL."""
    handler = SignalHandler()
    handler.handle(signal.SIGINT, None)

    mock_signal.assert_called_once_with(signal.SIGINT, signal.SIG_DFL)


def test_sigpipe_wins_over_sigint():
    handler = SignalHandler()
    handler.sigint_received.set()
    handler.sigpipe_received.set()
    assert handler.exit_code() == EXIT_SIGPIPE


def test_watched_signals_without_sigpipe():
    with patch("project_tree.cli.signal_handler.SIGPIPE", None):
        assert SignalHandler().watched_signals() == [signal.SIGINT]


def test_setup_signal_handling_installs_singleton(mock_signal):
    setup_signal_handling()

    for signum in signal_handler.watched_signals():
        mock_signal.assert_any_call(signum, signal_handler.handle)


@pytest.mark.parametrize("interrupted", [False, True])
def test_discard_stdout_after_interrupt(saved_signal_state, interrupted):
    if interrupted:
        saved_signal_state.sigint_received.set()

    with patch("project_tree.cli.signal_handler.os.open", return_value=123) as mock_open, patch(
        "project_tree.cli.signal_handler.os.dup2"
    ) as mock_dup2, patch.object(sys, "stdout") as mock_stdout:
        mock_stdout.fileno.return_value = 1
        discard_stdout_after_interrupt()

    if interrupted:
        mock_open.assert_called_once_with(os.devnull, os.O_WRONLY)
        mock_dup2.assert_called_once_with(123, 1)
    else:
        mock_open.assert_not_called()
        mock_dup2.assert_not_called()
