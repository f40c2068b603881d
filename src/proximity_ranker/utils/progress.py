"""Console progress reporting for ranking passes.

Provides a progress callback backed by tqdm plus coloured status lines,
for use by command-line callers of RankingSession.run_ranking_pass().
"""

from __future__ import annotations

from colorama import Fore, Style
from tqdm import tqdm


class TqdmProgress:
    """Progress callback with the (processed, total, label) signature.

    Usage:
        with TqdmProgress(desc="Geocoding") as progress:
            session.run_ranking_pass(origin, progress=progress)
    """

    def __init__(self, desc: str = "Geocoding locations", disable: bool = False):
        self.desc = desc
        self.disable = disable
        self._bar: tqdm | None = None

    def __call__(self, processed: int, total: int, label: str) -> None:
        if self._bar is None:
            self._bar = tqdm(total=total, desc=self.desc, unit="loc", disable=self.disable)
        self._bar.set_postfix_str(label[:40])
        self._bar.update(processed - self._bar.n)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def status_line(step_name: str, ok: bool, detail: str = "") -> str:
    """Format an aligned, coloured status line for a step."""
    max_len = len('Resolve origin address')  # Longest typical step name
    padding = max(max_len - len(step_name), 0) + 4

    if ok:
        outcome = f'{Fore.GREEN}Complete{Style.RESET_ALL}'
    else:
        outcome = f'{Fore.RED}Failed{Style.RESET_ALL}'
    line = f'{step_name} {"-" * padding}> {outcome}'
    return f'{line}: {detail}' if detail else line


def format_nearest(rank: int, name: str, distance_miles: float) -> str:
    """'#1 Name  1.2 mi' with the rank and distance highlighted."""
    return (
        f'{Fore.CYAN}#{rank}{Style.RESET_ALL} {Style.BRIGHT}{name}{Style.RESET_ALL}'
        f'  {Fore.YELLOW}{distance_miles:.1f} mi{Style.RESET_ALL}'
    )
