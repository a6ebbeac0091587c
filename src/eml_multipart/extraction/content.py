"""
Content materialization: drain a part's lazy body into owned bytes.
"""

from ..config import settings
from ..errors import MultipartError, StreamReadError
from ..models.part import RawPart


def materialize(part: RawPart) -> bytes:
    """
    Read the whole body of a part.

    Args:
        part: Part whose body has not been consumed yet

    Returns:
        Body bytes between the delimiters

    Raises:
        MultipartError: If reading fails mid-body; the bytes read so far are
            attached as ``partial_content``
    """
    content = bytearray()
    try:
        while True:
            chunk = part.body.read(settings.read_chunk_size)
            if not chunk:
                break
            content += chunk
    except MultipartError as e:
        e.partial_content = bytes(content)
        raise
    except OSError as e:
        raise StreamReadError(
            f"Failed to read body of part {part.index}: {e}",
            partial_content=bytes(content),
        ) from e
    return bytes(content)
