from abc import ABC, abstractmethod
from typing import Any, Dict

from ..data.table import Table


class BaseCalculator(ABC):
    @abstractmethod
    def fit(self, table: Table, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Calculates parameters (statistics, bounds, category maps) from the table.
        Returns a dictionary of fitted parameters (serializable).
        """
        pass


class BaseApplier(ABC):
    @abstractmethod
    def apply(self, table: Table, params: Dict[str, Any]) -> Table:
        """
        Applies the cleaning step using fitted parameters and returns a new table.
        """
        pass
