# roadmap_engine/planning/output.py
"""
Roadmap renderer for converting a Roadmap to structured markdown.

Converts generation output into a markdown document with metadata frontmatter.
"""

from roadmap_engine.models.roadmap import Roadmap
from roadmap_engine.models.skill import PHASE_DESCRIPTIONS


class RoadmapRenderer:
    """
    Converts Roadmap to structured markdown format.

    Format:
        ---
        target_role: str
        generated_at: ISO timestamp
        fingerprint: sha256
        weekly_hours: float
        total_hours: int
        projected_completion: ISO date
        ---

        # Roadmap: {target_role}

        ## Phase 1: Foundation
        | # | Module | Hours | Requires |
        ...
    """

    def render(self, roadmap: Roadmap, role_name: str | None = None) -> str:
        """
        Render Roadmap to markdown string.

        Args:
            roadmap: Generated roadmap
            role_name: Display name for the target role (defaults to the id)

        Returns:
            Formatted markdown string
        """
        sections = [self._render_frontmatter(roadmap)]

        sections.append(f"# Roadmap: {role_name or roadmap.target_role}")
        sections.append("")
        sections.append(
            f"**{len(roadmap.modules)} modules** · **{roadmap.total_hours} hours** "
            f"at {roadmap.weekly_hours:g} h/week · projected completion "
            f"**{roadmap.projected_completion.date().isoformat()}**"
        )
        sections.append("")

        if not roadmap.modules:
            sections.append("Nothing left to learn for this role.")
            sections.append("")
            return "\n".join(sections)

        names = {m.skill_id: m.name for m in roadmap.modules}
        for number, summary in enumerate(roadmap.phases, start=1):
            sections.append(f"## Phase {number}: {summary.name}")
            sections.append("")
            sections.append(f"_{PHASE_DESCRIPTIONS[summary.phase]}_")
            sections.append("")
            sections.append(
                f"{summary.total_modules} modules, {summary.total_hours:.1f} hours"
            )
            sections.append("")
            sections.append("| # | Module | Hours | Requires |")
            sections.append("|---|--------|-------|----------|")
            for module in summary.modules:
                requires = ", ".join(names[p] for p in module.prerequisite_ids) or "-"
                sections.append(
                    f"| {module.position} | {module.name} | "
                    f"{module.estimated_hours:.1f} | {requires} |"
                )
            sections.append("")

        return "\n".join(sections)

    def _render_frontmatter(self, roadmap: Roadmap) -> str:
        """Render YAML frontmatter."""
        lines = [
            "---",
            f"target_role: {roadmap.target_role}",
            f"generated_at: {roadmap.generated_at.isoformat()}",
            f"fingerprint: {roadmap.fingerprint}",
            f"weekly_hours: {roadmap.weekly_hours:g}",
            f"total_hours: {roadmap.total_hours}",
            f"raw_hours: {roadmap.raw_hours:.2f}",
            f"projected_completion: {roadmap.projected_completion.date().isoformat()}",
            "---",
            "",
        ]
        return "\n".join(lines)
