"""
Interpreter tests for the bfi interpreter.

Tests cover:
  - Output and input through byte streams
  - Modulo-256 cell arithmetic
  - Repeat re-evaluation (transfer idiom, nested loops)
  - Tape bounds and input exhaustion errors
  - Tape configuration
"""

import io
import sys

import pytest
from bf_interpreter import (InputExhaustedError, Interpreter, NestingDepthError,
                            Tape, TapeBoundsError, TapeConfig, TapeConfigError,
                            execute, parse, run_source, tokenize)
from bf_interpreter.ast_nodes import Decrement, Increment, Program, Repeat


def _run(code: str, stdin: bytes = b"", config: TapeConfig = None):
    """Run code and return (output bytes, tape)."""
    out = io.BytesIO()
    tape = run_source(code, config=config, stdin=io.BytesIO(stdin), stdout=out)
    return out.getvalue(), tape


# ─── Output / input ───────────────────────

class TestIO:
    def test_output_cell_value(self):
        out, _ = _run("+++.")
        assert out == b"\x03"

    def test_high_cell_value_is_utf8_encoded(self):
        out, _ = _run("-.")
        assert out == "\u00ff".encode("utf-8")
        assert out == b"\xc3\xbf"

    def test_ascii_cell_value_is_single_byte(self):
        out, _ = _run("+" * 127 + ".")
        assert out == b"\x7f"

    def test_hello_world(self):
        code = ("++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>."
                ">---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++.")
        out, _ = _run(code, config=TapeConfig(length=64, start=0))
        assert out == b"Hello World!\n"

    def test_echo_input(self):
        out, _ = _run(",.,.,.", stdin=b"abc")
        assert out == b"abc"

    def test_input_zero_byte_is_not_exhaustion(self):
        out, tape = _run("+,.", stdin=b"\x00")
        assert out == b"\x00"
        assert tape.value == 0

    def test_input_exhausted(self):
        with pytest.raises(InputExhaustedError) as exc:
            _run(",,", stdin=b"x")
        assert exc.value.ordinal == 1

    def test_input_exhausted_on_empty_source(self):
        with pytest.raises(InputExhaustedError):
            _run(",")

    def test_prompt_counts_reads(self):
        prompt = io.StringIO()
        run_source(",,", stdin=io.BytesIO(b"ab"), stdout=io.BytesIO(), prompt=prompt)
        assert prompt.getvalue() == "Input 0:\nInput 1:\n"

    def test_no_prompt_by_default(self, capsys):
        run_source(",", stdin=io.BytesIO(b"a"), stdout=io.BytesIO())
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


# ─── Arithmetic ───────────────────────────

class TestArithmetic:
    def test_increment_wraps_to_zero(self):
        _, tape = _run("+" * 256)
        assert tape.value == 0

    def test_255_plus_one(self):
        _, tape = _run("-+")
        assert tape.value == 0

    def test_decrement_wraps_to_255(self):
        _, tape = _run("-")
        assert tape.value == 255

    def test_increment_then_decrement_round_trip(self):
        _, tape = _run("+++++" + "+" * 256 + "-" * 256)
        assert tape.value == 5


# ─── Loops ────────────────────────────────

class TestLoops:
    def test_transfer_idiom(self):
        _, tape = _run("+[->+<]")
        start = tape.config.start
        assert tape.cells[start] == 0
        assert tape.cells[start + 1] == 1
        assert tape.pointer == start

    def test_loop_skipped_on_zero_cell(self):
        out, _ = _run("[.]")
        assert out == b""

    def test_multiply_with_nested_loops(self):
        # 3 * 4 into the cell two to the right
        _, tape = _run("+++[>++++[>+<-]<-]")
        start = tape.config.start
        assert tape.cells[start + 2] == 12
        assert tape.cells[start] == 0
        assert tape.cells[start + 1] == 0

    def test_clear_loop_with_wraparound(self):
        _, tape = _run("-[-]")
        assert tape.value == 0

    def test_nesting_past_stack_limit(self):
        body = [Decrement()]
        for _ in range(sys.getrecursionlimit() + 100):
            body = [Repeat(body=body)]
        program = Program(body=[Increment()] + body)
        with pytest.raises(NestingDepthError):
            execute(program, stdin=io.BytesIO(), stdout=io.BytesIO())


# ─── Tape bounds ──────────────────────────

class TestBounds:
    def test_move_left_from_zero(self):
        with pytest.raises(TapeBoundsError) as exc:
            _run("<", config=TapeConfig(length=8, start=0))
        assert exc.value.pointer == 0
        assert exc.value.direction == "left"

    def test_move_right_from_last_cell(self):
        with pytest.raises(TapeBoundsError) as exc:
            _run(">", config=TapeConfig(length=8, start=7))
        assert exc.value.pointer == 7
        assert exc.value.direction == "right"

    def test_walk_off_default_tape(self):
        with pytest.raises(TapeBoundsError):
            _run("+[>+]")

    def test_error_stops_execution(self):
        out = io.BytesIO()
        tape = Tape(TapeConfig(length=4, start=3))
        program = parse(tokenize("+.>."))
        with pytest.raises(TapeBoundsError):
            Interpreter(stdin=io.BytesIO(), stdout=out).run(program, tape)
        assert out.getvalue() == b"\x01"
        assert tape.pointer == 3


# ─── Tape configuration ───────────────────

class TestTapeConfig:
    def test_defaults(self):
        tape = Tape()
        assert len(tape) == 1024
        assert tape.pointer == 512
        assert not any(tape.cells)

    def test_start_defaults_to_middle(self):
        assert TapeConfig(length=10).start == 5

    def test_zero_length_rejected(self):
        with pytest.raises(TapeConfigError):
            TapeConfig(length=0)

    def test_start_outside_tape_rejected(self):
        with pytest.raises(TapeConfigError):
            TapeConfig(length=4, start=4)

    def test_execute_allocates_default_tape(self):
        tape = execute(parse(tokenize("++")), stdin=io.BytesIO(), stdout=io.BytesIO())
        assert tape.cells[512] == 2

    def test_dump_marks_current_cell(self):
        tape = Tape(TapeConfig(length=4, start=1))
        tape.value = 0xAB
        assert tape.dump(0, 4) == "0000:  00 [AB] 00  00 "
