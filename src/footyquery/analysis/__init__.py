"""
Matchup statistics and the head-to-head outcome heuristic for FootyQuery.

- `statistics` computes goal averages, form, head-to-head tallies, etc.
- `prediction` derives the winner pick and the prediction payload.
"""
