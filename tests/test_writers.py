from __future__ import annotations

import io
import threading
import unittest

try:
    from dokkulog.log import Logger
    from dokkulog.settings import OutputSettings
    from dokkulog.writers import (
        FlushingWriter,
        MutexLineWriter,
        PrefixingWriter,
        Source,
        paired_writers,
    )
except ModuleNotFoundError as exc:  # pragma: no cover - env-dependent
    Logger = None  # type: ignore[assignment]
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None


class _RecordingLogger:
    """Stands in for Logger and records which helper got which line."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def verbose_quiet(self, text: str) -> None:
        self.calls.append(("stdout", text))

    def verbose_stderr_quiet(self, text: str) -> None:
        self.calls.append(("stderr", text))


class _Downstream:
    def __init__(self, report=None, exc: BaseException | None = None) -> None:
        self.writes: list[bytes] = []
        self.report = report
        self.exc = exc

    def write(self, data: bytes):
        self.writes.append(data)
        if self.exc is not None:
            raise self.exc
        if self.report == "all":
            return len(data)
        return self.report


@unittest.skipIf(Logger is None, f"Missing dependency: {_IMPORT_ERROR}")
class MutexLineWriterTests(unittest.TestCase):
    def _writer(self, source=None):
        recorder = _RecordingLogger()
        writer = MutexLineWriter(recorder, threading.Lock(), source or Source.STDOUT)
        return recorder, writer

    def test_single_line_without_newline(self) -> None:
        recorder, writer = self._writer()
        self.assertEqual(writer.write(b"hello world"), 11)
        self.assertEqual(recorder.calls, [("stdout", "hello world")])

    def test_only_newlines_emit_nothing(self) -> None:
        recorder, writer = self._writer()
        for data in (b"", b"\n", b"\n\n\n"):
            self.assertEqual(writer.write(data), len(data))
        self.assertEqual(recorder.calls, [])

    def test_lines_emitted_in_order_skipping_blanks(self) -> None:
        recorder, writer = self._writer()
        data = b"one\n\ntwo\nthree\n\n"
        self.assertEqual(writer.write(data), len(data))
        self.assertEqual([text for _, text in recorder.calls], ["one", "two", "three"])

    def test_stderr_source_routes_to_stderr_helper(self) -> None:
        recorder, writer = self._writer(Source.STDERR)
        writer.write(b"boom\n")
        self.assertEqual(recorder.calls, [("stderr", "boom")])

    def test_source_accepts_plain_string_tag(self) -> None:
        recorder, writer = self._writer("stderr")
        writer.write(b"x")
        self.assertEqual(recorder.calls, [("stderr", "x")])

    def test_split_line_across_calls_is_logged_twice(self) -> None:
        recorder, writer = self._writer()
        writer.write(b"hel")
        writer.write(b"lo\n")
        self.assertEqual([text for _, text in recorder.calls], ["hel", "lo"])

    def test_invalid_utf8_is_replaced(self) -> None:
        recorder, writer = self._writer()
        writer.write(b"bad \xff byte\n")
        self.assertEqual(recorder.calls, [("stdout", "bad \ufffd byte")])

    def test_build_output_scenario_through_logger(self) -> None:
        out = io.StringIO()
        stdout_writer, _ = paired_writers(Logger(OutputSettings(), out=out, err=io.StringIO()))
        data = b"building...\napp started\n"
        self.assertEqual(stdout_writer.write(data), len(data))
        self.assertEqual(out.getvalue(), "       building...\n       app started\n")

    def test_stderr_binding_uses_alert_prefix(self) -> None:
        err = io.StringIO()
        _, stderr_writer = paired_writers(Logger(OutputSettings(), out=io.StringIO(), err=err))
        stderr_writer.write(b"warning: disk almost full\n")
        self.assertEqual(err.getvalue(), " !     warning: disk almost full\n")

    def test_quiet_mode_suppresses_but_consumes(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        stdout_writer, stderr_writer = paired_writers(Logger(OutputSettings(quiet=True), out=out, err=err))
        self.assertEqual(stdout_writer.write(b"a\nb\n"), 4)
        self.assertEqual(stderr_writer.write(b"c\n"), 2)
        self.assertEqual(out.getvalue(), "")
        self.assertEqual(err.getvalue(), "")

    def test_paired_writers_share_a_fresh_lock(self) -> None:
        logger = Logger(OutputSettings(), out=io.StringIO(), err=io.StringIO())
        first_out, first_err = paired_writers(logger)
        second_out, _ = paired_writers(logger)
        self.assertIs(first_out.lock, first_err.lock)
        self.assertIsNot(first_out.lock, second_out.lock)
        self.assertEqual((first_out.source, first_err.source), (Source.STDOUT, Source.STDERR))

    def test_concurrent_writes_keep_groups_contiguous(self) -> None:
        # Both sources write into one buffer so any interleaving would show.
        shared = io.StringIO()
        logger = Logger(OutputSettings(), out=shared, err=shared)
        writers = paired_writers(logger)
        rounds, lines_per_call = 50, 20
        start = threading.Barrier(len(writers))

        def _drive(index: int, writer) -> None:
            start.wait()
            for r in range(rounds):
                chunk = "".join(f"w{index}-r{r}-l{i}\n" for i in range(lines_per_call))
                writer.write(chunk.encode())

        threads = [threading.Thread(target=_drive, args=(i, w)) for i, w in enumerate(writers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        lines = [line.strip().split()[-1] for line in shared.getvalue().splitlines()]
        self.assertEqual(len(lines), len(writers) * rounds * lines_per_call)
        for offset in range(0, len(lines), lines_per_call):
            group = lines[offset:offset + lines_per_call]
            tag = group[0].rsplit("-", 1)[0]
            self.assertEqual(group, [f"{tag}-l{i}" for i in range(lines_per_call)])


@unittest.skipIf(Logger is None, f"Missing dependency: {_IMPORT_ERROR}")
class PrefixingWriterTests(unittest.TestCase):
    def test_empty_payload_skips_downstream(self) -> None:
        downstream = _Downstream(report="all")
        writer = PrefixingWriter(b"web.1 | ", downstream)
        self.assertEqual(writer.write(b""), 0)
        self.assertEqual(downstream.writes, [])

    def test_single_combined_write(self) -> None:
        downstream = _Downstream(report="all")
        writer = PrefixingWriter(b"web.1 | ", downstream)
        writer.write(b"GET / 200\n")
        self.assertEqual(downstream.writes, [b"web.1 | GET / 200\n"])

    def test_reported_count_clamped_to_payload(self) -> None:
        downstream = _Downstream(report="all")
        writer = PrefixingWriter(b"prefix:", downstream)
        self.assertEqual(writer.write(b"abc"), 3)

    def test_short_count_passes_through(self) -> None:
        writer = PrefixingWriter(b"prefix:", _Downstream(report=2))
        self.assertEqual(writer.write(b"abcdef"), 2)

    def test_none_count_passes_through(self) -> None:
        writer = PrefixingWriter(b"p", _Downstream(report=None))
        self.assertIsNone(writer.write(b"abc"))

    def test_downstream_error_propagates_unchanged(self) -> None:
        failure = BrokenPipeError("pipe closed")
        downstream = _Downstream(exc=failure)
        writer = PrefixingWriter(b"p", downstream)
        with self.assertRaises(BrokenPipeError) as ctx:
            writer.write(b"abc")
        self.assertIs(ctx.exception, failure)
        self.assertEqual(len(downstream.writes), 1)

    def test_prefix_is_not_mutated(self) -> None:
        prefix = bytearray(b"tag ")
        downstream = _Downstream(report="all")
        writer = PrefixingWriter(prefix, downstream)
        prefix[:] = b"XXXX"
        writer.write(b"a")
        writer.write(b"b")
        self.assertEqual(writer.prefix, b"tag ")
        self.assertEqual(downstream.writes, [b"tag a", b"tag b"])

    def test_flushing_writer_flushes_each_write(self) -> None:
        raw = io.BytesIO()
        buffered = io.BufferedWriter(raw)
        writer = PrefixingWriter(b"c1 | ", FlushingWriter(buffered))
        writer.write(b"hello\n")
        self.assertEqual(raw.getvalue(), b"c1 | hello\n")


if __name__ == "__main__":
    unittest.main()
