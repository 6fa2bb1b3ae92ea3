"""
Marshaling caller buffers into native pointers.

The codec reads and writes raw memory. This module turns Python buffer
objects into `c_void_p` addresses without copying where it can, and keeps
the objects that own the memory alive for as long as the returned handle is
referenced.


READ-ONLY INPUTS
----------------
`bytes` is passed by address directly. Writable buffers (`bytearray`,
writable `memoryview`) are wrapped in a ctypes array over the same memory.
Any other read-only buffer is copied into a `bytes` object first.


WRITABLE OUTPUTS
----------------
Outputs must expose writable, C-contiguous memory. Anything else is a
caller error and raises `TypeError` before the codec is invoked.


CONTIGUOUS WINDOWS
------------------
The codec expects dictionary history to sit immediately before the data it
primes. `Window` lays a dictionary and a payload out back to back in one
allocation so both can be addressed from a single base pointer.
"""

from __future__ import annotations

import ctypes
from dataclasses import dataclass
from typing import Any

from typing_extensions import Buffer


@dataclass(frozen=True, slots=True)
class NativeBuffer:
    """A native address over caller memory, plus the owner keeping it valid."""

    pointer: ctypes.c_void_p
    """Address of the first byte."""

    length: int
    """Number of addressable bytes."""

    owner: Any
    """Object whose lifetime bounds the memory; held only for its reference."""


def _as_byte_view(data: Buffer) -> memoryview:
    """View any buffer as a flat, C-contiguous sequence of bytes."""
    try:
        view = memoryview(data)
    except TypeError as e:
        raise TypeError(f"Expected a bytes-like object, got {type(data).__name__}") from e
    if not view.c_contiguous:
        raise TypeError("Buffer must be C-contiguous")
    return view.cast("B")


def readonly_buffer(data: Buffer) -> NativeBuffer:
    """Expose an input buffer to the codec."""
    if isinstance(data, bytes):
        # c_char_p keeps a reference to the bytes object; the cast result
        # inherits it.
        pointer = ctypes.cast(ctypes.c_char_p(data), ctypes.c_void_p)
        return NativeBuffer(pointer=pointer, length=len(data), owner=data)

    view = _as_byte_view(data)
    if view.readonly:
        return readonly_buffer(view.tobytes())
    return writable_buffer(view)


def writable_buffer(data: Buffer) -> NativeBuffer:
    """
    Expose an output buffer to the codec.

    Raises:
        TypeError: If the buffer is read-only or not contiguous.
    """
    view = _as_byte_view(data)
    if view.readonly:
        raise TypeError(f"Output buffer must be writable, got read-only {type(data).__name__}")

    array = (ctypes.c_char * len(view)).from_buffer(view)
    pointer = ctypes.cast(array, ctypes.c_void_p)
    return NativeBuffer(pointer=pointer, length=len(view), owner=array)


def buffer_length(data: Buffer) -> int:
    """Length of a buffer in bytes."""
    return _as_byte_view(data).nbytes


class Window:
    """
    A dictionary and a payload region laid out contiguously.

    Layout::

        [dictionary: prefix_len bytes][payload: payload_len bytes]

    The base address is the start of the dictionary; the payload address
    follows it directly.
    """

    def __init__(self, prefix: Buffer, payload_len: int) -> None:
        prefix_view = _as_byte_view(prefix)
        self.prefix_len = len(prefix_view)
        self.payload_len = payload_len
        self._storage = bytearray(self.prefix_len + payload_len)
        self._storage[: self.prefix_len] = prefix_view
        self._native = writable_buffer(self._storage)

    @property
    def base(self) -> ctypes.c_void_p:
        """Address of the dictionary start."""
        return self._native.pointer

    @property
    def payload(self) -> ctypes.c_void_p:
        """Address of the payload start."""
        return ctypes.c_void_p((self._native.pointer.value or 0) + self.prefix_len)

    @property
    def size(self) -> int:
        """Total window size in bytes."""
        return self.prefix_len + self.payload_len

    def fill_payload(self, data: Buffer) -> None:
        """Copy `data` into the payload region."""
        view = _as_byte_view(data)
        if len(view) != self.payload_len:
            raise ValueError(f"Payload must be {self.payload_len} bytes, got {len(view)}")
        self._storage[self.prefix_len :] = view

    def payload_bytes(self, length: int) -> memoryview:
        """View of the first `length` payload bytes."""
        return memoryview(self._storage)[self.prefix_len : self.prefix_len + length]
