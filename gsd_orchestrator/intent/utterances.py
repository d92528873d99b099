"""Example phrasings for the stock GSD commands.

Command descriptions are written for a reference page, not the way people
ask for things. These phrasings are folded into each command's training
document so everyday requests ("verify the work", "discuss phase 3") land
on the right command. Commands from other namespaces train on their own
text only.
"""

from typing import Dict, Tuple

EXAMPLE_UTTERANCES: Dict[str, Tuple[str, ...]] = {
    # Project and milestone lifecycle
    "gsd:new-project": (
        "start a new project",
        "initialize the project",
        "set up a brand new project",
    ),
    "gsd:new-milestone": (
        "start a new milestone",
        "begin the next version",
        "define the next set of goals",
    ),
    "gsd:audit-milestone": (
        "audit the milestone",
        "audit what we shipped",
        "review the milestone before archiving",
    ),
    "gsd:complete-milestone": (
        "complete the milestone",
        "ship the release",
        "archive this milestone",
    ),
    "gsd:plan-milestone-gaps": (
        "close the gaps",
        "create phases for the missing work",
        "fix what the review found",
    ),
    "gsd:map-codebase": (
        "map the codebase",
        "analyze this existing code",
        "understand the repo structure",
    ),
    # Phase work
    "gsd:discuss-phase": (
        "discuss the phase",
        "discuss the approach for this phase",
        "talk through the phase before planning",
        "let's discuss how to build it",
    ),
    "gsd:research-phase": (
        "research the phase",
        "research the domain before planning",
        "investigate libraries for this phase",
        "look into how to implement it",
    ),
    "gsd:list-phase-assumptions": (
        "what assumptions are we making",
        "list the assumptions for this phase",
        "show the planner assumptions",
    ),
    "gsd:plan-phase": (
        "plan the next phase",
        "plan this phase",
        "create a plan for the next phase",
        "make the execution plan",
    ),
    "gsd:execute-phase": (
        "execute the phase",
        "run the plans",
        "start building",
        "execute the remaining plans",
    ),
    "gsd:verify-work": (
        "verify the work",
        "verify the phase",
        "verify everything works",
        "test what was built",
        "run user acceptance testing",
    ),
    # Roadmap edits
    "gsd:add-phase": (
        "add a phase",
        "add a new phase to the roadmap",
        "append a phase at the end",
    ),
    "gsd:insert-phase": (
        "insert an urgent phase",
        "insert a phase after this one",
        "squeeze in urgent work between phases",
    ),
    "gsd:remove-phase": (
        "remove a phase",
        "remove this phase from the roadmap",
        "delete a future phase",
    ),
    # Session and housekeeping
    "gsd:progress": (
        "where are we",
        "what should I do next",
        "show progress",
        "what is the status",
    ),
    "gsd:quick": (
        "quick fix",
        "do a small task quickly",
        "just fix the typo",
    ),
    "gsd:debug": (
        "debug this failure",
        "something is broken",
        "investigate the bug",
        "tests are failing",
    ),
    "gsd:add-todo": (
        "add a todo",
        "remember this for later",
        "note this idea",
    ),
    "gsd:check-todos": (
        "check my todos",
        "what is on the todo list",
        "pick a todo to work on",
    ),
    "gsd:pause-work": (
        "pause work",
        "stop for today",
        "I need to take a break",
    ),
    "gsd:resume-work": (
        "resume work",
        "pick up where we left off",
        "continue from last time",
    ),
    "gsd:settings": (
        "change the settings",
        "configure the workflow",
        "toggle the verifier",
    ),
    "gsd:set-profile": (
        "switch to the budget profile",
        "use the quality models",
        "change the model profile",
    ),
    "gsd:update": (
        "update gsd",
        "upgrade to the latest version",
        "install the newest release",
    ),
    "gsd:help": (
        "help",
        "what commands are available",
        "how do I use gsd",
    ),
    "gsd:join-discord": (
        "join the discord",
        "where is the community",
    ),
}
