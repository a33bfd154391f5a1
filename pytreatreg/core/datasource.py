"""
Column container for PyTreatReg input data.

DataSource is the "I have data" abstraction. It holds named numeric columns
and knows nothing about regression. The Design decides which columns it
needs as treatment, outcome and covariate.

Usage:
    from pytreatreg.core.datasource import DataSource
    
    ds = DataSource.from_file("data.csv")
    ds = DataSource.from_dataframe(df)
    
    ds.keys()  # frozenset({'id', 'treatment', 'outcome', 'covariate'})
    y = ds['outcome']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pytreatreg.core.exceptions import ValidationError

if TYPE_CHECKING:
    import pandas as pd


@dataclass
class DataSource:
    """
    Named numeric columns. Domain-agnostic.
    
    Construct via factory classmethods, not directly.
    """
    _data: dict[str, NDArray[np.floating[Any]]]
    _metadata: dict[str, Any] = field(default_factory=dict)
    
    # === Column Access ===
    
    def keys(self) -> frozenset[str]:
        """
        Return the names of all available columns.
        
        Example:
            >>> ds = DataSource.from_dataframe(pd.DataFrame({"treatment": t, "outcome": y}))
            >>> ds.keys()
            frozenset({'treatment', 'outcome'})
        """
        return frozenset(self._data.keys())
    
    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named column.
        
        Raises:
            KeyError: If key not found, with message listing available keys
        """
        if key not in self._data:
            available = sorted(self.keys())
            raise KeyError(
                f"DataSource has no column '{key}'. Available: {available}"
            )
        return self._data[key]
    
    def __contains__(self, key: str) -> bool:
        """Check if a column exists."""
        return key in self._data
    
    # === Properties ===
    
    @property
    def n_observations(self) -> int:
        """Number of rows."""
        return self._metadata.get('n_observations', 0)
    
    @property
    def metadata(self) -> dict[str, Any]:
        """Source metadata (origin, path, column order)."""
        return self._metadata.copy()
    
    # === Factory Methods ===
    
    @classmethod
    def from_file(cls, path: str | Path) -> DataSource:
        """
        Construct from a delimited text file with a header row.

        '.csv' is comma separated, '.tsv' tab separated. Read with pandas.
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix not in ('.csv', '.tsv'):
            raise ValidationError(f"Unknown file format: {suffix}")

        import pandas as pd
        df = pd.read_csv(path, sep='\t' if suffix == '.tsv' else ',')
        return cls.from_dataframe(df, source_path=str(path))
    
    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, source_path: str | None = None) -> DataSource:
        """Construct from pandas DataFrame. Every column must be numeric."""
        storage: dict[str, NDArray[np.floating[Any]]] = {}
        
        for col in df.columns:
            try:
                storage[str(col)] = df[col].to_numpy(dtype=np.float64)
            except (ValueError, TypeError) as e:
                raise ValidationError(
                    f"column '{col}': cannot convert to float64: {e}"
                ) from e
        
        metadata = {
            'n_observations': len(df),
            'source': 'dataframe',
            'columns': [str(c) for c in df.columns],
        }
        if source_path:
            metadata['source_path'] = source_path
            
        return cls(_data=storage, _metadata=metadata)
