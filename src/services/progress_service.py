from typing import Optional

from tqdm import tqdm

from interfaces.progress_reporter import IProgressReporter


class TqdmProgressReporter(IProgressReporter):
    """Terminal progress bar showing the tile currently being warmed"""

    BAR_FORMAT = '{l_bar}{bar}| {n_fmt}/{total_fmt}{postfix}'

    def __init__(self, description: Optional[str] = None, leave: bool = True, **tqdm_kwargs):
        self.description = description
        self.leave = leave
        self.tqdm_kwargs = tqdm_kwargs
        self.bar: Optional[tqdm] = None

    def start(self, total: int) -> None:
        self.stop()
        self.bar = tqdm(
            total=total,
            desc=self.description,
            unit='tile',
            bar_format=self.BAR_FORMAT,
            leave=self.leave,
            **self.tqdm_kwargs
        )

    def increment(self, amount: int = 1, **metadata) -> None:
        if self.bar is None:
            return
        if metadata:
            self.bar.set_postfix(metadata, refresh=False)
        self.bar.update(amount)

    def set_total(self, total: int) -> None:
        if self.bar is None:
            return
        self.bar.total = total
        self.bar.refresh()

    def stop(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None


class NullProgressReporter(IProgressReporter):
    """Progress reporter that reports nothing"""

    def start(self, total: int) -> None:
        pass

    def increment(self, amount: int = 1, **metadata) -> None:
        pass

    def set_total(self, total: int) -> None:
        pass

    def stop(self) -> None:
        pass
