"""
Minimal smoke test for the engine structure.
Tests that the public entry points import and run on a tiny project.
"""


def test_imports():
    """Test that all basic imports work"""
    from dockle_engine import analyze_project, check_docker_smells, remediate_project
    from dockle_engine.models import Finding, ManifestSet, ProjectAnalysis
    from dockle_engine.manifests import locate_manifests, validate_structure
    from dockle_engine.rules import default_rules, detect_smells
    from dockle_engine.compose import suggest_improvements
    from dockle_engine.remediation import rewrite_dockerfile_text
    from dockle_engine.report import write_report

    assert len(default_rules()) == 8


def test_analyze_tiny_project(make_project):
    """Test a whole-project analysis end to end"""
    from dockle_engine import analyze_project

    root = make_project({"dockerfile": "FROM alpine:3.19\n"})
    analysis = analyze_project(root)

    assert analysis.structure_valid
    assert list(analysis.dockerfiles) == [str(root.resolve() / "dockerfile")]
