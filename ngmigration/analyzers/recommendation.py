"""Migration recommendation from a frozen analysis state.

Decision procedure, evaluated in order:

1. Framework generation. An application that only targets Angular needs no
   migration and stops here.
2. Rewrite threshold. Starting from one engineer-month of code, every
   anti-pattern category present grows the threshold once. If the
   application's lines of code fit under it, a rewrite from scratch is
   cheaper than an incremental migration.
3. Upgrade gate. Without any of the five anti-patterns the application is
   ready for ngUpgrade; otherwise it needs preparation first.
"""

from ngmigration.models.migration import (
    AnalysisState,
    AntiPatternCategory,
    FrameworkGeneration,
    Recommendation,
)


def classify_generation(state: AnalysisState) -> FrameworkGeneration:
    """Classify the application by the framework versions it declares."""
    if state.targets_modern_framework and not state.targets_legacy_framework:
        return "modern"
    if state.targets_modern_framework and state.targets_legacy_framework:
        return "hybrid"
    return "legacy"


def _instruction(category: AntiPatternCategory, state: AnalysisState) -> str:
    if category == "legacy_global_scope":
        return "Refactor $rootScope usage into services."
    if category == "dynamic_template_compilation":
        return "Rewrite $compile usage to eliminate dynamically compiled templates."
    if category == "missing_unit_tests":
        return "Add unit tests (no spec files found) before migrating."
    if category == "legacy_script_file":
        return (
            f"Convert JavaScript files to TypeScript: {state.script_file_count} JavaScript "
            f"file(s) left to convert, {state.typed_file_count} TypeScript file(s) already."
        )
    if state.component_directive_count > 0:
        return (
            f"Still have {state.legacy_controller_count} controller(s) to convert to "
            "component directives before upgrading with ngUpgrade."
        )
    return (
        f"Need to begin converting {state.legacy_controller_count} controller(s) to "
        "component directives before upgrading with ngUpgrade."
    )


def build_preparation_report(state: AnalysisState) -> str:
    """Build the preparation report text.

    One instructional line per present anti-pattern category, in fixed
    order, followed by one line per file of evidence in detection order.

    Returns:
        The report, or an empty string when there is nothing to report.
    """
    lines = [_instruction(category, state) for category in state.anti_patterns]
    for file_path, labels in state.file_evidence.items():
        lines.append(f"{file_path}: {', '.join(labels)}")
    return "\n".join(lines)


def upgrade_gate_passes(state: AnalysisState) -> bool:
    """True when none of the five anti-pattern conditions hold."""
    return (
        not state.uses_legacy_global_scope
        and not state.uses_dynamic_template_compilation
        and state.has_unit_tests
        and state.script_file_count == 0
        and state.legacy_controller_count == 0
    )


def upgrade_hint(state: AnalysisState) -> str | None:
    """Routing or custom-elements hint for an incremental upgrade."""
    if state.uses_custom_elements_bridge:
        return (
            "Angular Elements detected: downgrade upgraded components to custom "
            "elements to share them with the AngularJS side."
        )
    if state.uses_ui_router:
        return "ui-router detected: use the ui-router hybrid adapter to route both frameworks."
    if state.uses_legacy_router:
        return (
            "ngRoute detected: run the Angular router alongside ngRoute and "
            "migrate routes one at a time."
        )
    return None


def recommend(state: AnalysisState) -> Recommendation:
    """Produce the recommendation for a finished scan.

    Args:
        state: Analysis state, frozen at the end of traversal.

    Returns:
        The single Recommendation for the application.

    Raises:
        ValueError: If the state is still being written.
    """
    if not state.is_frozen:
        raise ValueError("Analysis state must be frozen before recommending")

    generation = classify_generation(state)
    threshold = state.rewrite_threshold
    loc = state.lines_of_code

    if generation == "modern":
        return Recommendation(
            classification="already-modern",
            framework_generation=generation,
            narrative="The application already targets Angular. No migration needed.",
            rewrite_threshold=threshold,
            lines_of_code=loc,
        )

    prefix = ""
    if generation == "hybrid":
        prefix = "Both AngularJS and Angular are declared (hybrid application). "

    if threshold >= loc:
        outstanding = "missing_unit_tests" in state.anti_patterns or bool(state.file_evidence)
        return Recommendation(
            classification="rewrite-recommended",
            framework_generation=generation,
            narrative=(
                f"{prefix}Max LOC: {threshold:.0f}, your LOC: {loc}. "
                "Rewrite from scratch in Angular: the application is small enough "
                "that a rewrite costs less than an incremental migration."
            ),
            preparation_report=build_preparation_report(state) if outstanding else None,
            rewrite_threshold=threshold,
            lines_of_code=loc,
        )

    if upgrade_gate_passes(state):
        return Recommendation(
            classification="incrementally-upgradable",
            framework_generation=generation,
            narrative=f"{prefix}You are ready to use ngUpgrade for an incremental migration.",
            upgrade_hint=upgrade_hint(state),
            rewrite_threshold=threshold,
            lines_of_code=loc,
        )

    return Recommendation(
        classification="needs-preparation",
        framework_generation=generation,
        narrative=(
            f"{prefix}Prepare the application before upgrading with ngUpgrade. "
            "Work through the preparation report below."
        ),
        preparation_report=build_preparation_report(state),
        rewrite_threshold=threshold,
        lines_of_code=loc,
    )
