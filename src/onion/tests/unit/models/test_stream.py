# ABOUTME: Unit tests for the Readable stream body
# ABOUTME: Tests chunk encoding, stream detection and error listener routing

import pytest

from onion.models.stream import Readable


async def _chunks(*items, fail: Exception | None = None):
    for item in items:
        yield item
    if fail is not None:
        raise fail


class TestReadable:
    """Unit tests for Readable."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_reads_async_source(self):
        """Test chunks of an async source are yielded as bytes."""
        stream = Readable(_chunks(b"a", "b"))

        assert await stream.read() == b"ab"
        assert stream.consumed

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_reads_sync_iterator(self):
        """Test a sync iterator is a valid source."""
        stream = Readable(iter(["x", "y"]))

        assert [chunk async for chunk in stream] == [b"x", b"y"]

    @pytest.mark.unit
    def test_rejects_non_iterables(self):
        """Test bytes and non-iterables are not stream sources."""
        with pytest.raises(TypeError):
            Readable(b"raw bytes")
        with pytest.raises(TypeError):
            Readable(42)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rejects_second_consumption(self):
        """Test a stream can only be read once."""
        stream = Readable(iter([b"once"]))
        await stream.read()

        with pytest.raises(RuntimeError, match="already been consumed"):
            await stream.read()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rejects_invalid_chunks(self):
        """Test chunks other than bytes or str fail."""
        with pytest.raises(TypeError, match="bytes or str"):
            await Readable(iter([1])).read()

    @pytest.mark.unit
    def test_is_stream(self):
        """Test stream detection separates iterators from JSON containers."""

        def gen():
            yield b""

        assert Readable.is_stream(Readable(iter([])))
        assert Readable.is_stream(_chunks())
        assert Readable.is_stream(gen())
        assert Readable.is_stream(iter([b"a"]))
        assert not Readable.is_stream([b"a"])
        assert not Readable.is_stream({"a": 1})
        assert not Readable.is_stream("text")
        assert not Readable.is_stream(b"bytes")

    @pytest.mark.unit
    def test_from_value_keeps_readables(self):
        stream = Readable(iter([]))

        assert Readable.from_value(stream) is stream
        assert isinstance(Readable.from_value(iter([])), Readable)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_error_without_listener_propagates(self):
        """Test a source error reaches the reader when nobody listens."""
        stream = Readable(_chunks(b"a", fail=OSError("broken")))

        with pytest.raises(OSError, match="broken"):
            await stream.read()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_error_goes_to_listeners(self):
        """Test a source error is delivered to listeners and iteration stops."""
        errors = []
        stream = Readable(_chunks(b"a", fail=OSError("broken")))
        stream.on_error(errors.append)

        assert await stream.read() == b"a"
        assert len(errors) == 1
        assert stream.errored is errors[0]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_async_listener_is_awaited(self):
        errors = []

        async def listener(error):
            errors.append(error)

        stream = Readable(_chunks(fail=ValueError("bad")))
        stream.on_error(listener)
        await stream.read()

        assert [type(e) for e in errors] == [ValueError]

    @pytest.mark.unit
    def test_listener_management(self):
        stream = Readable(iter([]))
        listener = print

        stream.on_error(listener)
        assert stream.has_error_listener(listener)

        stream.remove_error_listener(listener)
        assert not stream.has_error_listener(listener)
        assert stream.error_listeners == []
