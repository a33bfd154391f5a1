"""
Core protocols for PyTreatReg.

Structural interfaces that solver implementations must satisfy. Protocol
(structural typing) is used rather than ABC so a new solver only has to
provide the right shape, not inherit from anything.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pytreatreg.core.result import Result

P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.
    
    Each backend takes a validated design and produces a parameter payload
    wrapped in a Result. Swapping the normal-equations solve (explicit
    inverse, Cholesky, ...) means swapping the backend; the statistics
    computed downstream do not change shape.
    
    Backends are stateless. All configuration is passed at construction
    time, which makes them easy to test and swap.
    
    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """
    
    @property
    def name(self) -> str:
        """
        Backend identifier.
        
        Convention: '{device}_{algorithm}'
        Examples: 'cpu_inverse', 'cpu_cholesky'
        """
        ...
    
    def solve(self, design: D) -> Result[P]:
        """
        Execute the computation.
        
        Args:
            design: Validated design
            
        Returns:
            Result envelope containing parameter payload and metadata
            
        Raises:
            NumericalError: If numerical issues prevent solution (singularity)
        """
        ...
