from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Union

from pydantic import Field

from stargate_common.errors import ArgumentConflictError
from stargate_common.tooling import render, tool
from stargate_mcp.connectors.asana.client import AsanaClient

LIST_TASK_FIELDS = "name,gid,completed,assignee.name,due_on,custom_fields"
TASK_DETAIL_FIELDS = "name,notes,completed,assignee.name,due_on,custom_fields,memberships.section.name"


@dataclass(frozen=True)
class SectionScope:
    section_gid: str


@dataclass(frozen=True)
class ProjectScope:
    project_gid: str


TaskScope = Union[SectionScope, ProjectScope]


def task_scope(project_gid: str | None, section_gid: str | None) -> TaskScope:
    # The narrower scope wins when both are given.
    if section_gid:
        return SectionScope(section_gid)
    if project_gid:
        return ProjectScope(project_gid)
    raise ArgumentConflictError("Either project_gid or section_gid is required")


class AsanaTools:
    def __init__(self, client: AsanaClient) -> None:
        self.client = client

    @tool("asana_list_projects", "List all projects in your Asana workspace")
    def list_projects(
        self,
        workspace_gid: Annotated[str, Field(description="Workspace GID (run asana_list_workspaces to find it)")],
    ) -> Any:
        return self.client.request(
            f"/workspaces/{workspace_gid}/projects",
            params={"opt_fields": "name,gid,current_status"},
        )

    @tool("asana_list_workspaces", "List all Asana workspaces you have access to")
    def list_workspaces(self) -> Any:
        return self.client.request("/workspaces")

    @tool("asana_list_sections", "List all sections (columns) in an Asana project")
    def list_sections(
        self,
        project_gid: Annotated[str, Field(description="Project GID")],
    ) -> Any:
        return self.client.request(f"/projects/{project_gid}/sections")

    @tool("asana_list_tasks", "List tasks in an Asana project or section")
    def list_tasks(
        self,
        project_gid: Annotated[str | None, Field(description="Project GID (list all tasks in project)")] = None,
        section_gid: Annotated[str | None, Field(description="Section GID (list tasks in specific column)")] = None,
    ) -> Any:
        scope = task_scope(project_gid, section_gid)
        if isinstance(scope, SectionScope):
            endpoint = f"/sections/{scope.section_gid}/tasks"
        else:
            endpoint = f"/projects/{scope.project_gid}/tasks"
        return self.client.request(endpoint, params={"opt_fields": LIST_TASK_FIELDS})

    @tool("asana_get_task", "Get detailed information about a specific Asana task")
    def get_task(
        self,
        task_gid: Annotated[str, Field(description="Task GID")],
    ) -> Any:
        return self.client.request(f"/tasks/{task_gid}", params={"opt_fields": TASK_DETAIL_FIELDS})

    @tool(
        "asana_update_custom_fields",
        "Update custom fields on an Asana task (use for estimated/actual time)",
    )
    def update_custom_fields(
        self,
        task_gid: Annotated[str, Field(description="Task GID")],
        custom_fields: Annotated[
            dict[str, Union[str, int, float]],
            Field(description="Object mapping custom field GID to value, e.g. {'123456': 5, '789012': 3}"),
        ],
    ) -> str:
        task = self.client.request(f"/tasks/{task_gid}", "PUT", body={"custom_fields": custom_fields})
        return f"Updated task custom fields:\n{render(task)}"

    @tool("asana_move_task", "Move a task to a different section (column) in Asana")
    def move_task(
        self,
        task_gid: Annotated[str, Field(description="Task GID")],
        section_gid: Annotated[str, Field(description="Target section GID to move the task to")],
    ) -> str:
        self.client.request(f"/sections/{section_gid}/addTask", "POST", body={"task": task_gid})
        return f"Task {task_gid} moved to section {section_gid}"

    @tool(
        "asana_update_task",
        "Update basic task properties (name, notes, due date, completion status)",
    )
    def update_task(
        self,
        task_gid: Annotated[str, Field(description="Task GID")],
        name: Annotated[str | None, Field(description="New task name")] = None,
        notes: Annotated[str | None, Field(description="New task description/notes")] = None,
        due_on: Annotated[str | None, Field(description="Due date in YYYY-MM-DD format")] = None,
        completed: Annotated[bool | None, Field(description="Mark task as completed or not")] = None,
    ) -> str:
        updates = {
            k: v
            for k, v in {"name": name, "notes": notes, "due_on": due_on, "completed": completed}.items()
            if v is not None
        }
        task = self.client.request(f"/tasks/{task_gid}", "PUT", body=updates)
        return f"Updated task:\n{render(task)}"

    @tool("asana_add_comment", "Add a comment to an Asana task")
    def add_comment(
        self,
        task_gid: Annotated[str, Field(description="Task GID")],
        text: Annotated[str, Field(description="Comment text")],
    ) -> str:
        story = self.client.request(f"/tasks/{task_gid}/stories", "POST", body={"text": text})
        return f"Comment added:\n{render(story)}"
