"""Tests for the ROADMAP.md, STATE.md, PROJECT.md and config.json parsers."""

import logging
import warnings

from gsd_orchestrator.state import (
    Capability,
    ProjectConfig,
    parse_config,
    parse_project,
    parse_roadmap,
    parse_state,
)

ROADMAP = """# Roadmap

## Phases

- [x] **Phase 36: Discovery Foundation** (Complete 2026-02-08) - Scan filesystem
- [ ] **Phase 37: State Reading** - Parse planning docs
- [ ] **Phase 37.1: Hotfix** - Urgent fix

## Phase Details

### Phase 36: Discovery Foundation
**Capabilities**: use: skill/frontmatter, agent/gsd-executor, create: skill/cache

Plans:
- [x] 36-01-PLAN.md -- Scanner
- [x] 36-02-PLAN.md -- Cache

#### Phase 37: State Reading

Plans:
- [ ] 37-01: Roadmap parser
- [ ] 37-02

## Progress

- [ ] 99-01-PLAN.md -- not inside a phase section
"""

STATE = """# Project State

## Current Position

Phase: 37 of 44 (State Reading Infrastructure) -- In progress
Plan: 2 of 3
Status: Ready to plan
Last activity: 2026-02-08 - Completed 37-01

Progress: [####......] 42%

## Accumulated Context

### Decisions

- Use regex parsing
- Keep parsers pure

### Pending Todos

None.

### Blockers/Concerns

- Config format drift

## Session Continuity

Last session: 2026-02-08
Stopped at: Completed 37-01-PLAN.md
Resume file: None
"""

PROJECT = """# Skill Creator

## What This Is

An adaptive learning layer
for Claude Code.

Second paragraph is ignored.

## Core Value

Skills that learn.

## Current Milestone: v1.7 GSD Orchestrator
"""


class TestParseRoadmap:
    """Tests for parse_roadmap."""

    def test_phases(self):
        roadmap = parse_roadmap(ROADMAP)
        assert [p.number for p in roadmap.phases] == ["36", "37", "37.1"]
        first = roadmap.phases[0]
        assert first.name == "Discovery Foundation"
        assert first.complete is True
        assert first.completed_info == "Complete 2026-02-08"
        assert first.description == "Scan filesystem"
        assert roadmap.phases[1].complete is False
        assert roadmap.phases[1].completed_info is None

    def test_plans_by_phase(self):
        roadmap = parse_roadmap(ROADMAP)
        plans_36 = roadmap.plans_by_phase["36"]
        assert [(p.id, p.complete, p.description) for p in plans_36] == [
            ("36-01", True, "Scanner"),
            ("36-02", True, "Cache"),
        ]
        plans_37 = roadmap.plans_by_phase["37"]
        assert [(p.id, p.description) for p in plans_37] == [
            ("37-01", "Roadmap parser"),
            ("37-02", None),
        ]

    def test_plans_outside_phase_sections_ignored(self):
        roadmap = parse_roadmap(ROADMAP)
        assert "99" not in roadmap.plans_by_phase

    def test_capabilities_verb_carries_forward(self):
        roadmap = parse_roadmap(ROADMAP)
        assert roadmap.capabilities_by_phase == {
            "36": [
                Capability(verb="use", type="skill", name="frontmatter"),
                Capability(verb="use", type="agent", name="gsd-executor"),
                Capability(verb="create", type="skill", name="cache"),
            ]
        }

    def test_no_capabilities_is_none(self):
        roadmap = parse_roadmap("## Phases\n\n- [ ] **Phase 1: A** - x\n")
        assert roadmap.capabilities_by_phase is None
        assert roadmap.plans_by_phase == {}

    def test_blank_input(self):
        assert parse_roadmap("") is None
        assert parse_roadmap("   \n") is None

    def test_no_phases_section(self):
        assert parse_roadmap("# Roadmap\n\nNothing yet.\n") is None

    def test_empty_phases_section(self):
        roadmap = parse_roadmap("## Phases\n\nTBD\n")
        assert roadmap.phases == []


class TestParseState:
    """Tests for parse_state."""

    def test_position(self):
        position = parse_state(STATE).position
        assert position.phase == 37
        assert position.total_phases == 44
        assert position.phase_name == "State Reading Infrastructure"
        assert position.phase_status == "In progress"
        assert position.plan == 2
        assert position.total_plans == 3
        assert position.status == "Ready to plan"
        assert position.progress_percent == 42
        assert position.last_activity == "2026-02-08 - Completed 37-01"

    def test_bullet_sections(self):
        state = parse_state(STATE)
        assert state.decisions == ["Use regex parsing", "Keep parsers pure"]
        assert state.pending_todos == []
        assert state.blockers == ["Config format drift"]

    def test_session_continuity(self):
        session = parse_state(STATE).session_continuity
        assert session.last_session == "2026-02-08"
        assert session.stopped_at == "Completed 37-01-PLAN.md"
        assert session.resume_file == "None"

    def test_decimal_phase(self):
        state = parse_state("## Current Position\n\nPhase: 37.1 of 44 (Hotfix)\n")
        assert state.position.phase == 37.1
        assert state.position.phase_status is None

    def test_partial_position(self):
        state = parse_state("## Current Position\n\nStatus: Phase complete\n")
        assert state.position.status == "Phase complete"
        assert state.position.phase is None
        assert state.decisions == []

    def test_blank_input(self):
        assert parse_state("") is None

    def test_no_position(self):
        assert parse_state("# Project State\n\nNothing here.\n") is None


class TestParseProject:
    """Tests for parse_project."""

    def test_fields(self):
        project = parse_project(PROJECT)
        assert project.name == "Skill Creator"
        assert project.description == "An adaptive learning layer for Claude Code."
        assert project.core_value == "Skills that learn."
        assert project.current_milestone == "v1.7 GSD Orchestrator"

    def test_missing_sections(self):
        project = parse_project("# Just A Title\n")
        assert project.name == "Just A Title"
        assert project.core_value is None
        assert project.current_milestone is None
        assert project.description is None

    def test_blank_input(self):
        assert parse_project("  ") is None


class TestParseConfig:
    """Tests for parse_config."""

    def test_empty_object_is_all_defaults(self):
        assert parse_config("{}") == ProjectConfig()

    def test_defaults(self):
        config = parse_config("{}")
        assert config.mode == "interactive"
        assert config.verbosity == 3
        assert config.depth == "standard"
        assert config.model_profile == "balanced"
        assert config.parallelization is False
        assert config.commit_docs is True
        assert config.search_gitignored is False
        assert config.safety.max_files_per_commit == 20
        assert config.gates.require_checkpoint_approval is True
        assert config.git.commit_style == "conventional"

    def test_recognized_fields(self):
        config = parse_config(
            '{"mode": "yolo", "verbosity": 5, "depth": "quick", "model_profile": "quality",'
            ' "workflow": {"research": false}, "safety": {"require_tests": false}}'
        )
        assert config.mode == "yolo"
        assert config.verbosity == 5
        assert config.depth == "quick"
        assert config.model_profile == "quality"
        assert config.workflow.research is False
        assert config.workflow.verifier is True
        assert config.safety.require_tests is False

    def test_model_prefixed_keys_do_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")

            class ProfileConfig(ProjectConfig):
                model_profile: str = "quality"

        assert ProfileConfig().model_profile == "quality"

    def test_parallelization_object_kept(self):
        config = parse_config('{"parallelization": {"enabled": true, "max_parallel": 4}}')
        assert config.parallelization == {"enabled": True, "max_parallel": 4}

    def test_unknown_keys_pass_through(self):
        config = parse_config('{"contextWindowSize": 100000}')
        assert config.model_extra["contextWindowSize"] == 100000

    def test_planning_keys_hoisted(self):
        config = parse_config('{"planning": {"commit_docs": false, "search_gitignored": true}}')
        assert config.commit_docs is False
        assert config.search_gitignored is True

    def test_top_level_wins_over_planning(self):
        config = parse_config('{"commit_docs": true, "planning": {"commit_docs": false}}')
        assert config.commit_docs is True

    def test_invalid_field_falls_back_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = parse_config('{"mode": "reckless", "verbosity": 4}')
        assert config.mode == "interactive"
        assert config.verbosity == 4
        assert "mode" in caplog.text

    def test_blank_and_invalid(self):
        assert parse_config("") is None
        assert parse_config("{broken") is None
        assert parse_config("[1, 2]") is None
