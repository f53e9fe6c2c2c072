"""saju-compat: Four-Pillars relation engine and name compatibility scorer.

Data flows one way::

    tables -> analysis (relations, roots) -> scoring -> reporting / cli
"""

__version__ = "0.1.0"
