"""
SolverHub
A marketplace matching student solvers with startups posting problems.

Architecture:
- SQL database: profiles, problems, applications, identity records
- JWT sessions: issued by the built-in identity service
- Filtering: pure in-memory functions over loaded collections
"""

__version__ = "1.0.0"
