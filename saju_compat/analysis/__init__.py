"""Chart analysis over the canonical tables: pure functions, no I/O.

Modules
-------
relations : branch relation classifier (combinations, clash family),
            tuchul() / dominant_revealed(), find_relations() chart scan.
roots     : root_strength() / has_root() / chart_roots() / root_ratio().
"""
