"""Backing type of a fraction whose inputs are all python scalars (no numpy integer or fraction operand)"""

DEFAULT_BACKING: type[int] = int

"""Name of the function which the expression rewriter substitutes for every true division"""
EXPRESSION_DIVIDE_NAME: str = "divide"
