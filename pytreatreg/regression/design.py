"""
Treatment regression design.

Design takes the three input columns (treatment, outcome, covariate) and
builds the fixed 3-column design matrix [1, treatment, covariate] and the
response vector. It is the validation boundary: once a Design exists,
backends and inference trust its contents.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pytreatreg.core.datasource import DataSource
from pytreatreg.core.validation import (
    as_numeric,
    check_finite,
    check_residual_df,
    check_same_length,
    check_shape,
)

# Intercept, treatment, covariate
N_PARAMS = 3
TERM_NAMES = ('(Intercept)', 'treatment', 'covariate')


@dataclass(frozen=True)
class Design:
    """
    Design matrix for outcome ~ 1 + treatment + covariate.
    
    Immutable after construction.
    
    Construction:
        Design.build(treatment, outcome, covariate)       # From sequences
        Design.from_datasource(ds)                         # Default column names
        Design.from_datasource(ds, treatment='t', ...)     # Custom column names
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _covariate: NDArray[np.floating[Any]]
    _n: int
    _source: DataSource | None = None
    
    @classmethod
    def build(
        cls,
        treatment: ArrayLike,
        outcome: ArrayLike,
        covariate: ArrayLike,
        *,
        source: DataSource | None = None,
    ) -> Design:
        """
        Validate the three columns and assemble the design matrix.
        
        Args:
            treatment: Treatment values (n,)
            outcome: Outcome values (n,)
            covariate: Covariate values (n,)
            source: Originating DataSource, if any
        
        Returns:
            Design ready for fitting
            
        Raises:
            ValidationError: If a column is non-numeric or non-finite
            DimensionError: If columns are not 1D, differ in length, or
                have fewer than N_PARAMS + 1 rows
        """
        columns = {
            'treatment': as_numeric(treatment, 'treatment'),
            'outcome': as_numeric(outcome, 'outcome'),
            'covariate': as_numeric(covariate, 'covariate'),
        }
        for name, arr in columns.items():
            check_shape(arr, (None,), name)
        n = check_same_length(**columns)
        check_residual_df(n, N_PARAMS)
        for name, arr in columns.items():
            check_finite(arr, name)

        t, y, c = columns['treatment'], columns['outcome'], columns['covariate']
        X = np.column_stack([np.ones(n), t, c])
        X.setflags(write=False)
        y = y.copy()
        y.setflags(write=False)
        c = c.copy()
        c.setflags(write=False)
        
        return cls(_X=X, _y=y, _covariate=c, _n=n, _source=source)
    
    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        treatment: str = 'treatment',
        outcome: str = 'outcome',
        covariate: str = 'covariate',
    ) -> Design:
        """
        Build Design from named DataSource columns.
        
        Any other columns (an 'id' column, for instance) are ignored.
        """
        return cls.build(
            source[treatment],
            source[outcome],
            source[covariate],
            source=source,
        )
    
    # === Properties ===
    
    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x 3)."""
        return self._X
    
    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Outcome vector (n,)."""
        return self._y
    
    @property
    def treatment(self) -> NDArray[np.floating[Any]]:
        """Treatment column (n,)."""
        return self._X[:, 1]
    
    @property
    def covariate(self) -> NDArray[np.floating[Any]]:
        """Covariate column (n,)."""
        return self._covariate
    
    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n
    
    @property
    def p(self) -> int:
        """Number of parameters, including the intercept."""
        return N_PARAMS
    
    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source
    
    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute the Gram matrix X'X."""
        return self._X.T @ self._X
    
    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y
