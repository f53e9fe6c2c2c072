"""
Compatibility scoring: combines the chart's element distribution, relation
and root signals, and the upstream structure inputs into a 0–100 score with
an evidence trace.

Modules
-------
elements   : chart_distribution() / name_distribution() / combine_distributions().
components : balance / yongshin-match / strength / ten-god sub-scores and
             penalties — pure functions, no I/O.
trace      : TraceRecorder (append-only step log for one evaluation).
scorer     : evaluate_name() — the weighted-sum-then-penalty pipeline.
ranker     : score_candidates() + top_n() for batch evaluation.
"""
