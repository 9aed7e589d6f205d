"""
Tag-tree serialization shared by every encoder.

The three output formats only differ in byte order and layout, so they all
build an nbtlib Compound and hand it to to_gzipped_bytes.
"""
import gzip
import io

import nbtlib

BIG_ENDIAN = "big"
LITTLE_ENDIAN = "little"


def to_signed_64(value: int) -> int:
    value &= 0xFFFFFFFFFFFFFFFF
    if value >= 1 << 63:
        value -= 1 << 64
    return value


def to_unsigned_64(value: int) -> int:
    return value & 0xFFFFFFFFFFFFFFFF


def xyz(x: int, y: int, z: int) -> nbtlib.Compound:
    return nbtlib.Compound({
        "x": nbtlib.Int(x),
        "y": nbtlib.Int(y),
        "z": nbtlib.Int(z),
    })


def int_list(values) -> nbtlib.List:
    return nbtlib.List[nbtlib.Int]([nbtlib.Int(v) for v in values])


def to_gzipped_bytes(root: nbtlib.Compound, root_name: str = "", byteorder: str = BIG_ENDIAN) -> bytes:
    nbt_file = nbtlib.File(root, root_name=root_name)
    buf = io.BytesIO()
    # mtime=0 keeps the output reproducible
    with gzip.GzipFile(fileobj=buf, mode="wb", mtime=0) as gz:
        nbt_file.write(gz, byteorder=byteorder)
    return buf.getvalue()


def from_gzipped_bytes(data: bytes, byteorder: str = BIG_ENDIAN) -> nbtlib.File:
    with gzip.GzipFile(fileobj=io.BytesIO(data), mode="rb") as gz:
        return nbtlib.File.parse(gz, byteorder=byteorder)
