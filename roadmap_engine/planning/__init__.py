# roadmap_engine/planning/__init__.py
"""
Roadmap planning pipeline.

Provides the stages of roadmap generation (graph loading, gap analysis,
sequencing, phase assignment, estimation, assembly) and the orchestration
that runs them in order.
"""
