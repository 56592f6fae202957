from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

from rich.pretty import pprint

from argkind import *


@dataclass
class Arguments:
    source: Path
    threads: int = 4
    verbose: bool = False
    color: Annotated[bool, Decoder(lambda text: text in ("on", "always"))] = True
    include: list[str] = field(default_factory=list)
    defines: dict[str, int] = field(default_factory=dict)


if __name__ == '__main__':
    pprint(collect(Arguments))
