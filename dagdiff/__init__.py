r"""@package dagdiff

Python expression-DAG differentiation project.

Single-variable real expressions are built as graphs of immutable nodes in
the dagdiff.exprs package. Their derivatives can be obtained either
symbolically, as new expression graphs, or pointwise using forward mode
automatic differentiation. Both ways compute the same values, but symbolic
derivatives become expensive to evaluate when taken repeatedly (expression
swell), which the dagdiff.exprs.tree module helps to quantify.
"""
