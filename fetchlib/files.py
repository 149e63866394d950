import asyncio
import re
from pathlib import Path
from typing import List, Union


async def read_file(path: Union[str, Path], encoding: str = "utf-8") -> str:
    # OSError / UnicodeDecodeError propagate to the caller
    return await asyncio.to_thread(Path(path).read_text, encoding=encoding)


def count_mentions(text: str, word: str) -> int:
    if not word:
        return 0
    return len(re.findall(re.escape(word), text, flags=re.IGNORECASE))


def file_info(text: str) -> List[str]:
    return [
        f"Here is your file: {text}",
        f"It is {len(text)} characters long.",
    ]
