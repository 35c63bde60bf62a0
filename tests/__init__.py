from tests._RandomGenerator import RandomGenerator
from tests.helper import dotproduct_adjointness_test, linear_operator_unitary_test

__all__ = ["RandomGenerator", "dotproduct_adjointness_test", "linear_operator_unitary_test"]
