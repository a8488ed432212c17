import io
import json
from unittest.mock import MagicMock

from flowsentry.worker.worker import Worker


def _make_worker() -> tuple[Worker, MagicMock]:
    """Create a Worker with a mocked node that echoes sent=True."""
    mock_node = MagicMock()
    mock_node.handle.side_effect = lambda msg: {**msg, "payload": {"sent": True}}
    settings = MagicMock(app_env="test")
    return Worker(mock_node, settings), mock_node


def _lines(*msgs: object) -> io.StringIO:
    return io.StringIO("".join(json.dumps(m) + "\n" for m in msgs))


class TestWorkerDispatch:
    def test_dispatches_each_message(self) -> None:
        worker, mock_node = _make_worker()
        out = io.StringIO()

        handled = worker.run(_lines({"a": 1}, {"b": 2}), out)

        assert handled == 2
        assert mock_node.handle.call_count == 2

    def test_writes_one_json_line_per_message(self) -> None:
        worker, _node = _make_worker()
        out = io.StringIO()

        worker.run(_lines({"topic": "t"}), out)

        assert json.loads(out.getvalue()) == {"topic": "t", "payload": {"sent": True}}

    def test_stops_at_max_messages(self) -> None:
        worker, mock_node = _make_worker()

        handled = worker.run(_lines({"a": 1}, {"b": 2}, {"c": 3}), io.StringIO(), max_messages=2)

        assert handled == 2
        assert mock_node.handle.call_count == 2


class TestWorkerSkipsBadInput:
    def test_skips_blank_lines(self) -> None:
        worker, mock_node = _make_worker()
        worker.run(io.StringIO("\n   \n"), io.StringIO())
        mock_node.handle.assert_not_called()

    def test_skips_invalid_json(self) -> None:
        worker, mock_node = _make_worker()
        source = io.StringIO('{not json\n{"ok": true}\n')

        handled = worker.run(source, io.StringIO())

        assert handled == 1
        mock_node.handle.assert_called_once_with({"ok": True})

    def test_skips_non_object_json(self) -> None:
        worker, mock_node = _make_worker()
        worker.run(_lines([1, 2], "text", 3), io.StringIO())
        mock_node.handle.assert_not_called()


class TestWorkerShutdown:
    def test_handles_keyboard_interrupt(self) -> None:
        worker, mock_node = _make_worker()
        mock_node.handle.side_effect = KeyboardInterrupt

        handled = worker.run(_lines({"a": 1}), io.StringIO())  # Should not raise

        assert handled == 0
