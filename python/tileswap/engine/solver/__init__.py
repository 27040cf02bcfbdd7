from tileswap.engine.solver.solver import Solver

__all__ = ["Solver"]
