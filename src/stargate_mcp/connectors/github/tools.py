from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Field

from stargate_common.tooling import tool
from stargate_mcp.connectors.github import queries
from stargate_mcp.connectors.github.client import GitHubClient
from stargate_mcp.connectors.github.models import (
    AttachExisting,
    ProjectFieldValue,
    has_status,
    project_item_request,
)

Owner = Annotated[str, Field(description="Repository owner")]
Repo = Annotated[str, Field(description="Repository name")]
IssueNumber = Annotated[int, Field(description="Issue number")]


class GitHubTools:
    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    # -- Projects V2 (GraphQL) ---------------------------------------------

    @tool("github_list_projects", "List GitHub Projects V2 for a user or organization")
    def list_projects(
        self,
        owner: Annotated[str, Field(description="GitHub username or organization name")],
        owner_type: Annotated[
            Literal["user", "organization"],
            Field(description="Whether the owner is a user or organization"),
        ],
        first: Annotated[int | None, Field(description="Number of projects to return (default 20)")] = None,
    ) -> Any:
        data = self.client.graphql(
            queries.list_projects_query(owner_type),
            {"owner": owner, "first": first if first is not None else 20},
        )
        return data[owner_type]["projectsV2"]["nodes"]

    @tool(
        "github_get_project_fields",
        "Get all fields for a GitHub Project V2 (Status options are your board columns)",
    )
    def get_project_fields(
        self,
        project_id: Annotated[str, Field(description="Project node ID (from github_list_projects)")],
    ) -> Any:
        data = self.client.graphql(queries.PROJECT_FIELDS, {"projectId": project_id})
        return data["node"]["fields"]["nodes"]

    @tool(
        "github_list_project_items",
        "List items on a GitHub Project V2 board with optional status filter and pagination",
    )
    def list_project_items(
        self,
        project_id: Annotated[str, Field(description="Project node ID")],
        first: Annotated[int | None, Field(description="Number of items to return (default 50)")] = None,
        after: Annotated[str | None, Field(description="Cursor for pagination")] = None,
        status_filter: Annotated[
            str | None,
            Field(description="Filter by status column name (e.g. 'In Progress')"),
        ] = None,
    ) -> dict[str, Any]:
        data = self.client.graphql(
            queries.PROJECT_ITEMS,
            {"projectId": project_id, "first": first if first is not None else 50, "after": after},
        )
        page = data["node"]["items"]

        # Filtering happens on the fetched page; pageInfo still describes the unfiltered page.
        items = page["nodes"]
        if status_filter:
            items = [item for item in items if has_status(item, status_filter)]

        return {"pageInfo": page["pageInfo"], "items": items}

    @tool(
        "github_get_project_item",
        "Get full details of a single GitHub Project V2 item (all fields, issue body, assignees, labels)",
    )
    def get_project_item(
        self,
        item_id: Annotated[str, Field(description="Project item node ID (from github_list_project_items)")],
    ) -> Any:
        data = self.client.graphql(queries.PROJECT_ITEM, {"itemId": item_id})
        return data["node"]

    @tool(
        "github_update_project_item_field",
        "Update a field value on a GitHub Project V2 item. Use this to move items between "
        "columns by setting the Status field",
    )
    def update_project_item_field(
        self,
        project_id: Annotated[str, Field(description="Project node ID")],
        item_id: Annotated[str, Field(description="Project item node ID")],
        field_id: Annotated[str, Field(description="Field node ID (from github_get_project_fields)")],
        value: Annotated[
            ProjectFieldValue,
            Field(
                description=(
                    "Field value: use singleSelectOptionId for Status/Priority, text for text fields, "
                    "number for number fields, date (YYYY-MM-DD) for date fields, iterationId for "
                    "iteration fields"
                )
            ),
        ],
    ) -> Any:
        return self.client.graphql(
            queries.UPDATE_ITEM_FIELD,
            {
                "projectId": project_id,
                "itemId": item_id,
                "fieldId": field_id,
                "value": value.to_variables(),
            },
        )

    @tool(
        "github_add_project_item",
        "Add an existing issue/PR to a GitHub Project V2, or create a draft issue on it",
    )
    def add_project_item(
        self,
        project_id: Annotated[str, Field(description="Project node ID")],
        content_id: Annotated[
            str | None,
            Field(description="Issue or PR node ID to add (omit for draft issue)"),
        ] = None,
        draft_title: Annotated[
            str | None,
            Field(description="Title for a new draft issue (omit content_id to use)"),
        ] = None,
        draft_body: Annotated[str | None, Field(description="Body for the draft issue")] = None,
    ) -> Any:
        request = project_item_request(content_id, draft_title, draft_body)
        if isinstance(request, AttachExisting):
            return self.client.graphql(
                queries.ADD_ITEM_BY_ID,
                {"projectId": project_id, "contentId": request.content_id},
            )
        return self.client.graphql(
            queries.ADD_DRAFT_ISSUE,
            {"projectId": project_id, "title": request.title, "body": request.body},
        )

    # -- Issues (REST) -----------------------------------------------------

    @tool("github_list_issue_comments", "List comments on a GitHub issue")
    def list_issue_comments(self, owner: Owner, repo: Repo, issue_number: IssueNumber) -> Any:
        return self.client.rest(f"/repos/{owner}/{repo}/issues/{issue_number}/comments")

    @tool("github_add_issue_comment", "Add a comment to a GitHub issue")
    def add_issue_comment(
        self,
        owner: Owner,
        repo: Repo,
        issue_number: IssueNumber,
        body: Annotated[str, Field(description="Comment body (Markdown supported)")],
    ) -> Any:
        return self.client.rest(
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            "POST",
            {"body": body},
        )

    @tool("github_list_sub_issues", "List sub-issues for a GitHub issue")
    def list_sub_issues(
        self,
        owner: Owner,
        repo: Repo,
        issue_number: Annotated[int, Field(description="Parent issue number")],
    ) -> Any:
        return self.client.rest(f"/repos/{owner}/{repo}/issues/{issue_number}/sub_issues")

    @tool("github_update_issue", "Update a GitHub issue (title, body, state, labels, assignees)")
    def update_issue(
        self,
        owner: Owner,
        repo: Repo,
        issue_number: IssueNumber,
        title: Annotated[str | None, Field(description="New issue title")] = None,
        body: Annotated[str | None, Field(description="New issue body")] = None,
        state: Annotated[Literal["open", "closed"] | None, Field(description="Set issue state")] = None,
        labels: Annotated[list[str] | None, Field(description="Replace labels with this list")] = None,
        assignees: Annotated[
            list[str] | None,
            Field(description="Replace assignees with this list of usernames"),
        ] = None,
    ) -> Any:
        updates = {
            k: v
            for k, v in {
                "title": title,
                "body": body,
                "state": state,
                "labels": labels,
                "assignees": assignees,
            }.items()
            if v is not None
        }
        return self.client.rest(f"/repos/{owner}/{repo}/issues/{issue_number}", "PATCH", updates)
