import io
import os
import threading
import unittest
from unittest.mock import MagicMock, patch

from rich.console import Console

from advconsole import AdvConsole, ConsoleColor, RichBackend, create_backend, get_console
from advconsole import terminal


class HoldingBackend:
    """Records (text, color) and holds the write of "a" until released."""

    def __init__(self):
        self.color = ConsoleColor.GRAY
        self.output = []
        self.holding = threading.Event()
        self.release = threading.Event()

    def get_foreground_color(self):
        return self.color

    def set_foreground_color(self, color):
        self.color = color

    def write(self, text, newline=False):
        if text == "a":
            self.holding.set()
            self.release.wait(timeout=5)
        self.output.append((text + ("\n" if newline else ""), self.color))


def make_console(lock=None):
    buffer = io.StringIO()
    backend = RichBackend(Console(file=buffer, color_system=None))
    return AdvConsole(backend, lock=lock), buffer


class TestAdvConsole(unittest.TestCase):
    """Test the AdvConsole facade"""

    def test_write_and_write_line(self):
        con, buffer = make_console()
        con.write("a")
        con.write(1.5)
        con.write_line()
        con.write_line("{0}={1}", "x", 10)
        self.assertEqual(buffer.getvalue(), "a1.5\nx=10\n")

    def test_write_line_colored_restores(self):
        con, buffer = make_console()
        con.foreground_color = ConsoleColor.DARK_YELLOW
        con.write_line_colored(ConsoleColor.GREEN, "Build {0} passed", 42)
        self.assertEqual(buffer.getvalue(), "Build 42 passed\n")
        self.assertIs(con.foreground_color, ConsoleColor.DARK_YELLOW)

    def test_write_colored(self):
        con, buffer = make_console()
        con.write_colored("red", True)
        self.assertEqual(buffer.getvalue(), "True")
        self.assertIs(con.foreground_color, ConsoleColor.GRAY)

    def test_colored_block(self):
        con, _ = make_console()
        with con.colored(ConsoleColor.CYAN):
            self.assertIs(con.foreground_color, ConsoleColor.CYAN)
        self.assertIs(con.foreground_color, ConsoleColor.GRAY)

    def test_color_properties(self):
        con, _ = make_console()
        con.foreground_color = "white"
        con.background_color = 4
        self.assertIs(con.foreground_color, ConsoleColor.WHITE)
        self.assertIs(con.background_color, ConsoleColor.DARK_RED)

    def test_reset_color(self):
        con, _ = make_console()
        con.foreground_color = ConsoleColor.RED
        con.reset_color()
        self.assertIs(con.foreground_color, ConsoleColor.GRAY)

    @patch("advconsole.terminal.get_default_background", return_value=ConsoleColor.BLACK)
    @patch("advconsole.terminal.get_default_foreground", return_value=ConsoleColor.GRAY)
    def test_reset_foreground_and_background(self, mock_fg, mock_bg):
        con, _ = make_console()
        con.foreground_color = ConsoleColor.MAGENTA
        con.background_color = ConsoleColor.WHITE
        con.reset_foreground_color()
        con.reset_background_color()
        self.assertIs(con.foreground_color, ConsoleColor.GRAY)
        self.assertIs(con.background_color, ConsoleColor.BLACK)

    def test_pass_through(self):
        backend = MagicMock()
        con = AdvConsole(backend)
        con.beep()
        con.clear()
        con.set_title("build")
        backend.read_line.return_value = "line"
        self.assertEqual(con.read_line(), "line")
        backend.beep.assert_called_once_with()
        backend.clear.assert_called_once_with()
        backend.set_title.assert_called_once_with("build")

    def test_lock_shared_with_writer(self):
        lock = threading.RLock()
        con, buffer = make_console(lock=lock)
        with con.colored(ConsoleColor.RED):
            con.write_colored(ConsoleColor.BLUE, "nested")
            con.write_line(" plain")
        self.assertEqual(buffer.getvalue(), "nested plain\n")
        self.assertIs(con.writer.lock, lock)



class TestConcurrency(unittest.TestCase):
    """Test that a console lock covers plain writes too"""

    def test_plain_write_waits_for_colored_write(self):
        """Test that a plain write can't land inside another thread's colored scope"""
        backend = HoldingBackend()
        con = AdvConsole(backend, lock=threading.Lock())

        first = threading.Thread(target=con.write_line_colored, args=(ConsoleColor.RED, "a"))
        first.start()
        self.assertTrue(backend.holding.wait(timeout=5))
        second = threading.Thread(target=con.write_line, args=("b",))
        second.start()
        second.join(timeout=0.2)
        # still waiting for the lock held by the colored write
        self.assertTrue(second.is_alive())
        self.assertEqual(backend.output, [])

        backend.release.set()
        first.join(timeout=5)
        second.join(timeout=5)
        self.assertEqual(
            backend.output,
            [("a\n", ConsoleColor.RED), ("b\n", ConsoleColor.GRAY)],
        )

    def test_plain_write_without_lock(self):
        backend = HoldingBackend()
        con = AdvConsole(backend)
        con.write_line("b")
        self.assertEqual(backend.output, [("b\n", ConsoleColor.GRAY)])


class TestDefaultConsole(unittest.TestCase):
    """Test the shared default console"""

    def setUp(self):
        self.patcher = patch.object(terminal, "_default_console", None)
        self.patcher.start()

    def tearDown(self):
        self.patcher.stop()

    def test_same_instance(self):
        self.assertIs(get_console(), get_console())

    def test_backend_from_settings(self):
        con = get_console()
        self.assertIsInstance(con.backend, RichBackend)


class TestCreateBackend(unittest.TestCase):
    """Test building the backend from settings"""

    @patch("advconsole.config.load_config")
    @patch("advconsole.terminal.load_config", return_value={"LINE_ENDING": "crlf"})
    def test_config_file_read_once(self, mock_load, mock_inner_load):
        """Test that all settings come from a single read of the config file"""
        with patch.dict(os.environ):
            for key in ("DEFAULT_FOREGROUND", "DEFAULT_BACKGROUND", "LINE_ENDING"):
                os.environ.pop(key, None)
            backend = create_backend(Console(file=io.StringIO(), color_system=None))
        mock_load.assert_called_once_with()
        mock_inner_load.assert_not_called()
        self.assertEqual(backend.line_terminator, "\r\n")
        self.assertIs(backend.default_foreground, ConsoleColor.GRAY)


if __name__ == "__main__":
    unittest.main()
