from abc import ABC, abstractmethod


class IProgressReporter(ABC):
    """Observer driven by the warmer while it walks the tile pyramid"""
    
    @abstractmethod
    def start(self, total: int) -> None:
        """Begin reporting with the initial number of known tiles"""
        pass
    
    @abstractmethod
    def increment(self, amount: int = 1, **metadata) -> None:
        """Advance by amount; metadata carries layer, x, y and z"""
        pass
    
    @abstractmethod
    def set_total(self, total: int) -> None:
        """Update the number of known tiles"""
        pass
    
    @abstractmethod
    def stop(self) -> None:
        """Finish reporting"""
        pass
