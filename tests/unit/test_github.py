import json

import pytest

from stargate_common.errors import GraphQLError
from stargate_mcp.connectors.github import GitHubClient, GitHubTools
from stargate_mcp.connectors.github.models import (
    AttachExisting,
    CreateDraft,
    ProjectFieldValue,
    project_item_request,
)
from stargate_mcp.core_infrastructure.http_client import HttpClient
from tests.helpers.fakes import FakeGitHubClient, FakeSession, make_response


def _item(i: int, status: str) -> dict:
    return {
        "id": f"PVTI_{i}",
        "fieldValues": {
            "nodes": [
                {},
                {"text": f"note {i}", "field": {"name": "Notes"}},
                {"name": status, "field": {"name": "Status"}},
            ]
        },
        "content": {"number": i, "title": f"Issue {i}", "state": "OPEN", "url": f"https://x/{i}"},
    }


# -- client -----------------------------------------------------------------


def test_graphql_posts_query_and_variables():
    session = FakeSession(make_response(200, {"data": {"node": {"id": "X"}}}))
    client = GitHubClient("ghp", http=HttpClient(session=session))

    assert client.graphql("query { viewer { login } }", {"a": 1}) == {"node": {"id": "X"}}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.github.com/graphql"
    assert call["json"] == {"query": "query { viewer { login } }", "variables": {"a": 1}}
    assert call["headers"]["Authorization"] == "Bearer ghp"


def test_graphql_errors_are_joined():
    payload = {"data": None, "errors": [{"message": "first"}, {"message": "second"}]}
    client = GitHubClient("ghp", http=HttpClient(session=FakeSession(make_response(200, payload))))

    with pytest.raises(GraphQLError) as ei:
        client.graphql("query { x }")
    assert str(ei.value) == "GitHub GraphQL error: first, second"
    assert ei.value.messages == ["first", "second"]


def test_rest_sends_versioned_headers_and_handles_no_content():
    session = FakeSession(make_response(204))
    client = GitHubClient("ghp", http=HttpClient(session=session))

    assert client.rest("/repos/o/r/issues/1/labels", "DELETE") is None
    headers = session.calls[0]["headers"]
    assert headers["Accept"] == "application/vnd.github+json"
    assert headers["X-GitHub-Api-Version"] == "2022-11-28"
    assert session.calls[0]["url"] == "https://api.github.com/repos/o/r/issues/1/labels"


def test_rest_error_carries_status_and_body(envelope_tools):
    session = FakeSession(make_response(422, text='{"message":"Validation Failed"}'))
    tools = envelope_tools(GitHubTools(GitHubClient("ghp", http=HttpClient(session=session))))

    res = tools["github_add_issue_comment"](owner="o", repo="r", issue_number=1, body="x")
    assert res.isError is True
    assert res.content[0].text == 'Error: GitHub REST API error (422): {"message":"Validation Failed"}'


# -- request variants -------------------------------------------------------


def test_project_item_request_variants():
    assert project_item_request("I_1", "Draft") == AttachExisting("I_1")
    assert project_item_request(None, "Draft", "body") == CreateDraft("Draft", "body")
    assert project_item_request("", "Draft") == CreateDraft("Draft", None)


def test_field_value_only_carries_supplied_keys():
    assert ProjectFieldValue(singleSelectOptionId="opt1").to_variables() == {"singleSelectOptionId": "opt1"}
    assert ProjectFieldValue().to_variables() == {}


# -- handlers ---------------------------------------------------------------


def test_graphql_error_becomes_error_envelope(envelope_tools):
    payload = {"data": {"node": None}, "errors": [{"message": "Could not resolve to a node"}]}
    session = FakeSession(make_response(200, payload))
    tools = envelope_tools(GitHubTools(GitHubClient("ghp", http=HttpClient(session=session))))

    res = tools["github_get_project_item"](item_id="PVTI_missing")
    assert res.isError is True
    assert "Could not resolve to a node" in res.content[0].text


def test_add_project_item_requires_content_or_draft(envelope_tools):
    fake = FakeGitHubClient()
    res = envelope_tools(GitHubTools(fake))["github_add_project_item"](project_id="PVT_1")

    assert res.isError is True
    assert "Either content_id (for existing issue/PR) or draft_title (for draft issue) is required" in res.content[0].text
    assert fake.graphql_calls == []


def test_add_project_item_content_id_takes_precedence(envelope_tools):
    fake = FakeGitHubClient({"addProjectV2ItemById": {"item": {"id": "PVTI_9"}}})
    res = envelope_tools(GitHubTools(fake))["github_add_project_item"](
        project_id="PVT_1", content_id="I_1", draft_title="ignored"
    )

    (query, variables), = fake.graphql_calls
    assert "addProjectV2ItemById" in query
    assert variables == {"projectId": "PVT_1", "contentId": "I_1"}
    assert json.loads(res.content[0].text) == {"addProjectV2ItemById": {"item": {"id": "PVTI_9"}}}


def test_add_project_item_creates_draft(envelope_tools):
    fake = FakeGitHubClient({"addProjectV2DraftIssue": {"projectItem": {"id": "PVTI_10"}}})
    envelope_tools(GitHubTools(fake))["github_add_project_item"](project_id="PVT_1", draft_title="Spike")

    (query, variables), = fake.graphql_calls
    assert "addProjectV2DraftIssue" in query
    assert variables == {"projectId": "PVT_1", "title": "Spike", "body": None}


def test_list_project_items_filters_after_fetching_one_page(envelope_tools):
    nodes = [_item(i, "In Progress" if i in (3, 17, 41) else "Todo") for i in range(50)]
    page_info = {"hasNextPage": True, "endCursor": "Y3Vyc29yOjUw"}
    fake = FakeGitHubClient({"node": {"items": {"pageInfo": page_info, "nodes": nodes}}})

    res = envelope_tools(GitHubTools(fake))["github_list_project_items"](
        project_id="PVT_1", first=50, status_filter="In Progress"
    )

    (_, variables), = fake.graphql_calls
    assert variables == {"projectId": "PVT_1", "first": 50, "after": None}
    out = json.loads(res.content[0].text)
    assert out["pageInfo"] == page_info
    assert [item["id"] for item in out["items"]] == ["PVTI_3", "PVTI_17", "PVTI_41"]


def test_list_project_items_defaults_to_page_of_fifty(envelope_tools):
    fake = FakeGitHubClient({"node": {"items": {"pageInfo": {}, "nodes": [_item(1, "Done")]}}})
    res = envelope_tools(GitHubTools(fake))["github_list_project_items"](project_id="PVT_1", after="c1")

    assert fake.graphql_calls[0][1]["first"] == 50
    assert fake.graphql_calls[0][1]["after"] == "c1"
    assert len(json.loads(res.content[0].text)["items"]) == 1


def test_list_projects_reads_owner_root(envelope_tools):
    nodes = [{"id": "PVT_1", "title": "Roadmap"}]
    fake = FakeGitHubClient({"organization": {"projectsV2": {"nodes": nodes}}})
    res = envelope_tools(GitHubTools(fake))["github_list_projects"](owner="acme", owner_type="organization")

    query, variables = fake.graphql_calls[0]
    assert "organization(login: $owner)" in query
    assert variables == {"owner": "acme", "first": 20}
    assert json.loads(res.content[0].text) == nodes


def test_get_project_fields(envelope_tools):
    fields = [{"id": "F1", "name": "Status", "dataType": "SINGLE_SELECT", "options": []}]
    fake = FakeGitHubClient({"node": {"fields": {"nodes": fields}}})
    res = envelope_tools(GitHubTools(fake))["github_get_project_fields"](project_id="PVT_1")

    assert fake.graphql_calls[0][1] == {"projectId": "PVT_1"}
    assert json.loads(res.content[0].text) == fields


def test_update_project_item_field_sends_only_set_value_keys(envelope_tools):
    fake = FakeGitHubClient({"updateProjectV2ItemFieldValue": {"projectV2Item": {"id": "PVTI_1"}}})
    envelope_tools(GitHubTools(fake))["github_update_project_item_field"](
        project_id="PVT_1",
        item_id="PVTI_1",
        field_id="F1",
        value=ProjectFieldValue(singleSelectOptionId="opt-done"),
    )

    (query, variables), = fake.graphql_calls
    assert "updateProjectV2ItemFieldValue" in query
    assert variables["value"] == {"singleSelectOptionId": "opt-done"}


def test_update_issue_without_optional_fields_sends_empty_object(envelope_tools):
    fake = FakeGitHubClient()
    res = envelope_tools(GitHubTools(fake))["github_update_issue"](owner="o", repo="r", issue_number=7)

    assert fake.rest_calls == [{"endpoint": "/repos/o/r/issues/7", "method": "PATCH", "body": {}}]
    assert res.isError is False
    assert res.content[0].text == "{}"


def test_update_issue_sends_only_supplied_fields(envelope_tools):
    fake = FakeGitHubClient()
    envelope_tools(GitHubTools(fake))["github_update_issue"](
        owner="o", repo="r", issue_number=7, state="closed", labels=[]
    )
    assert fake.rest_calls[0]["body"] == {"state": "closed", "labels": []}


def test_issue_comment_and_sub_issue_endpoints(envelope_tools):
    fake = FakeGitHubClient()
    tools = envelope_tools(GitHubTools(fake))

    tools["github_list_issue_comments"](owner="o", repo="r", issue_number=3)
    tools["github_add_issue_comment"](owner="o", repo="r", issue_number=3, body="LGTM")
    tools["github_list_sub_issues"](owner="o", repo="r", issue_number=3)

    assert fake.rest_calls == [
        {"endpoint": "/repos/o/r/issues/3/comments", "method": "GET", "body": None},
        {"endpoint": "/repos/o/r/issues/3/comments", "method": "POST", "body": {"body": "LGTM"}},
        {"endpoint": "/repos/o/r/issues/3/sub_issues", "method": "GET", "body": None},
    ]
