"""GraphQL documents for GitHub Projects V2."""

_FIELD_VALUES = """
fieldValues(first: 20) {
  nodes {
    ... on ProjectV2ItemFieldTextValue {
      text
      field { ... on ProjectV2Field { name } }
    }
    ... on ProjectV2ItemFieldNumberValue {
      number
      field { ... on ProjectV2Field { name } }
    }
    ... on ProjectV2ItemFieldDateValue {
      date
      field { ... on ProjectV2Field { name } }
    }
    ... on ProjectV2ItemFieldSingleSelectValue {
      name
      field { ... on ProjectV2SingleSelectField { name } }
    }
    ... on ProjectV2ItemFieldIterationValue {
      title
      startDate
      duration
      field { ... on ProjectV2IterationField { name } }
    }
  }
}
"""


def list_projects_query(owner_type: str) -> str:
    # `user` and `organization` are distinct root fields; the owner type picks one.
    return f"""
query($owner: String!, $first: Int!) {{
  {owner_type}(login: $owner) {{
    projectsV2(first: $first) {{
      nodes {{
        id
        title
        number
        shortDescription
        closed
        url
      }}
    }}
  }}
}}
"""


PROJECT_FIELDS = """
query($projectId: ID!) {
  node(id: $projectId) {
    ... on ProjectV2 {
      fields(first: 50) {
        nodes {
          ... on ProjectV2Field {
            id
            name
            dataType
          }
          ... on ProjectV2SingleSelectField {
            id
            name
            dataType
            options {
              id
              name
              description
              color
            }
          }
          ... on ProjectV2IterationField {
            id
            name
            dataType
            configuration {
              iterations {
                id
                title
                startDate
                duration
              }
            }
          }
        }
      }
    }
  }
}
"""

PROJECT_ITEMS = (
    """
query($projectId: ID!, $first: Int!, $after: String) {
  node(id: $projectId) {
    ... on ProjectV2 {
      items(first: $first, after: $after) {
        pageInfo {
          hasNextPage
          endCursor
        }
        nodes {
          id
"""
    + _FIELD_VALUES
    + """
          content {
            ... on Issue {
              number
              title
              state
              url
            }
            ... on PullRequest {
              number
              title
              state
              url
            }
            ... on DraftIssue {
              title
              body
            }
          }
        }
      }
    }
  }
}
"""
)

PROJECT_ITEM = (
    """
query($itemId: ID!) {
  node(id: $itemId) {
    ... on ProjectV2Item {
      id
"""
    + _FIELD_VALUES
    + """
      content {
        ... on Issue {
          number
          title
          body
          state
          url
          assignees(first: 10) { nodes { login } }
          labels(first: 10) { nodes { name color } }
          milestone { title dueOn }
        }
        ... on PullRequest {
          number
          title
          body
          state
          url
          assignees(first: 10) { nodes { login } }
          labels(first: 10) { nodes { name color } }
          milestone { title dueOn }
        }
        ... on DraftIssue {
          title
          body
          assignees(first: 10) { nodes { login } }
        }
      }
    }
  }
}
"""
)

UPDATE_ITEM_FIELD = """
mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $value: ProjectV2FieldValue!) {
  updateProjectV2ItemFieldValue(input: {
    projectId: $projectId
    itemId: $itemId
    fieldId: $fieldId
    value: $value
  }) {
    projectV2Item {
      id
    }
  }
}
"""

ADD_ITEM_BY_ID = """
mutation($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: { projectId: $projectId, contentId: $contentId }) {
    item { id }
  }
}
"""

ADD_DRAFT_ISSUE = """
mutation($projectId: ID!, $title: String!, $body: String) {
  addProjectV2DraftIssue(input: { projectId: $projectId, title: $title, body: $body }) {
    projectItem { id }
  }
}
"""
