"""Allow ``python -m nd_automata``."""

from nd_automata.experiments.search import main

main()
