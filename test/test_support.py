"""
test/test_support.py — Layout, time range, entropy, NullUUID and CLI

Run: pytest test/test_support.py -v
"""

import contextlib
import io
import uuid
from datetime import timedelta

from pydantic import ValidationError

from comb_core import (
    AbsentIdentifierError,
    CombError,
    ChaCha20Entropy,
    ConfigurationError,
    EntropyError,
    NullUUID,
    SystemEntropy,
    TimestampLayout,
    read_full,
    time_range,
)
from tools.comb_cli import main as cli_main


# ==================================================================
# 1. Layout
# ==================================================================

def test_layout_defaults():
    layout = TimestampLayout()
    assert layout.timestamp_bytes == 6
    assert layout.resolution_ns == 100_000
    assert layout.rfc4122 is True
    assert layout.random_bytes == 10
    assert layout.timestamp_bits == 48
    print("  PASS: test_layout_defaults")


def test_layout_build_accepts_timedelta():
    layout = TimestampLayout.build(timestamp_bytes=8, resolution=timedelta(milliseconds=1))
    assert layout.resolution_ns == 1_000_000
    assert layout.random_bytes == 8
    print("  PASS: test_layout_build_accepts_timedelta")


def test_layout_rejects_bad_configuration():
    for kwargs in ({"timestamp_bytes": 0}, {"timestamp_bytes": 9}, {"resolution": 0}):
        try:
            TimestampLayout.build(**kwargs)
            raise AssertionError(f"Expected ConfigurationError for {kwargs}")
        except ConfigurationError as e:
            assert isinstance(e, ValueError)
    print("  PASS: test_layout_rejects_bad_configuration")


def test_layout_is_frozen():
    layout = TimestampLayout()
    try:
        layout.timestamp_bytes = 4
        raise AssertionError("Expected ValidationError")
    except ValidationError:
        pass
    print("  PASS: test_layout_is_frozen")


# ==================================================================
# 2. Time range
# ==================================================================

def test_time_range_default_layout():
    """48 bits at 1/10 ms lasts a little under 892 years."""
    span = time_range(48, 100_000)
    assert span.years == 891
    assert span.days == 350
    assert abs(span.seconds - 19271.0656) < 1e-6
    assert str(span).startswith("891 years 350 days 19271.065600 seconds")
    assert TimestampLayout().time_range() == span
    print("  PASS: test_time_range_default_layout")


def test_time_range_small_counter():
    span = time_range(16, timedelta(seconds=1))
    assert (span.years, span.days) == (0, 0)
    assert span.seconds == 65536
    assert span.total_seconds == 65536
    print("  PASS: test_time_range_small_counter")


def test_time_range_rejects_bad_width():
    for bits in (0, -1):
        try:
            time_range(bits, 100_000)
            raise AssertionError(f"Expected ConfigurationError for {bits}")
        except ConfigurationError as e:
            assert e.context["word_size_bits"] == bits
    print("  PASS: test_time_range_rejects_bad_width")


# ==================================================================
# 3. Entropy
# ==================================================================

def test_system_entropy_length():
    data = SystemEntropy().read(10)
    assert isinstance(data, bytes) and len(data) == 10
    print("  PASS: test_system_entropy_length")


def test_chacha20_is_reproducible():
    a = ChaCha20Entropy.from_seed(b"seed")
    b = ChaCha20Entropy.from_seed(b"seed")
    assert a.read(10) + a.read(6) == b.read(16)
    assert ChaCha20Entropy.from_seed(b"other").read(16) != ChaCha20Entropy.from_seed(b"seed").read(16)
    print("  PASS: test_chacha20_is_reproducible")


def test_read_full_short_source():
    try:
        read_full(io.BytesIO(b"abc"), 4)
        raise AssertionError("Expected EntropyError")
    except EntropyError as e:
        assert e.requested == 4 and e.received == 3
        assert e.step == "entropy"
    assert read_full(io.BytesIO(b"abcdef"), 4) == b"abcd"
    assert read_full(io.BytesIO(b""), 0) == b""
    print("  PASS: test_read_full_short_source")


# ==================================================================
# 4. NullUUID
# ==================================================================

def test_null_uuid_absent_is_not_zero():
    absent = NullUUID.absent()
    zero = NullUUID.of(uuid.UUID(int=0))
    assert not absent.valid
    assert zero.valid
    assert absent != zero
    assert absent.to_db() is None
    assert zero.to_db() == "00000000-0000-0000-0000-000000000000"
    try:
        absent.unwrap()
        raise AssertionError("Expected AbsentIdentifierError")
    except AbsentIdentifierError as e:
        assert isinstance(e, CombError) and isinstance(e, ValueError)
    print("  PASS: test_null_uuid_absent_is_not_zero")


def test_null_uuid_from_db():
    id = uuid.UUID("0123abcd-0000-6000-e000-00000000ffff")
    assert NullUUID.from_db(None) == NullUUID.absent()
    assert NullUUID.from_db(str(id)).unwrap() == id
    assert NullUUID.from_db(id.bytes).unwrap() == id
    assert NullUUID.from_db(str(id).encode("ascii")).unwrap() == id
    assert NullUUID.from_db(id).unwrap() == id
    print("  PASS: test_null_uuid_from_db")


# ==================================================================
# 5. CLI
# ==================================================================

def _run_cli(*argv):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = cli_main(list(argv))
    return code, out.getvalue()


def test_cli_new():
    code, out = _run_cli("new", "-n", "3", "--seed", "00ff")
    lines = out.split()
    assert code == 0 and len(lines) == 3
    for line in lines:
        assert uuid.UUID(line).bytes[6] >> 4 == 0x6
    print("  PASS: test_cli_new")


def test_cli_read():
    code, out = _run_cli("read", "00000000-0000-0000-0000-ffffffffffff")
    assert code == 0
    assert "281474976710655" in out
    assert "0xffffffffffff" in out
    print("  PASS: test_cli_read")


def test_cli_range():
    code, out = _run_cli("range")
    assert code == 0
    assert "48 bits at 100000ns: 891 years" in out
    print("  PASS: test_cli_range")


def test_cli_reports_configuration_errors():
    code, out = _run_cli("new", "--bytes", "9")
    assert code == 1
    assert "ERROR" in out
    print("  PASS: test_cli_reports_configuration_errors")


def test_cli_read_out_of_range_timestamp():
    code, out = _run_cli("read", "00000000-0000-0000-ffff-ffffffffffff", "--bytes", "8")
    assert code == 1
    assert "ERROR" in out
    assert "datetime range" in out
    print("  PASS: test_cli_read_out_of_range_timestamp")


def test_cli_range_zero_bits():
    code, out = _run_cli("range", "--bits", "0")
    assert code == 1
    assert "ERROR" in out and "word size" in out
    print("  PASS: test_cli_range_zero_bits")


def run_all():
    print("=" * 60)
    print("Support Tests")
    print("=" * 60)
    test_layout_defaults()
    test_layout_build_accepts_timedelta()
    test_layout_rejects_bad_configuration()
    test_layout_is_frozen()
    test_time_range_default_layout()
    test_time_range_small_counter()
    test_time_range_rejects_bad_width()
    test_system_entropy_length()
    test_chacha20_is_reproducible()
    test_read_full_short_source()
    test_null_uuid_absent_is_not_zero()
    test_null_uuid_from_db()
    test_cli_new()
    test_cli_read()
    test_cli_range()
    test_cli_reports_configuration_errors()
    test_cli_read_out_of_range_timestamp()
    test_cli_range_zero_bits()
    print("\nALL SUPPORT TESTS PASSED")


if __name__ == "__main__":
    run_all()
