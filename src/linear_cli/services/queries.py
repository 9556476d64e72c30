"""GraphQL documents sent to the Linear API.

Any query that declares ``$filter`` also declares and uses
``$includeArchived``; ``linear validate-queries`` checks this module.
"""

ISSUE_FIELDS = """
      id
      identifier
      title
      description
      priority
      url
      createdAt
      updatedAt
      state { id name type color }
      assignee { id name displayName email }
      cycle { id number name startsAt endsAt }
      attachments { nodes { id title url sourceType } }
"""

VIEWER_QUERY = """query Viewer {
  viewer { id name displayName email }
}"""

ISSUES_QUERY = (
    """query Issues($filter: IssueFilter, $includeArchived: Boolean, $first: Int) {
  issues(filter: $filter, includeArchived: $includeArchived, first: $first) {
    nodes {"""
    + ISSUE_FIELDS
    + """    }
  }
}"""
)

SEARCH_ISSUES_QUERY = (
    """query SearchIssues($term: String!, $includeArchived: Boolean, $first: Int) {
  searchIssues(term: $term, includeArchived: $includeArchived, first: $first) {
    nodes {"""
    + ISSUE_FIELDS
    + """    }
  }
}"""
)

TEAMS_QUERY = """query Teams {
  teams { nodes { id key name } }
}"""

TEAM_ACTIVE_CYCLE_QUERY = """query TeamActiveCycle($teamId: String!) {
  team(id: $teamId) {
    id
    activeCycle { id number name startsAt endsAt }
  }
}"""

FIRST_TEAM_ACTIVE_CYCLE_QUERY = """query FirstTeamActiveCycle($first: Int) {
  teams(first: $first) {
    nodes { id activeCycle { id number name startsAt endsAt } }
  }
}"""

CREATE_ISSUE_MUTATION = (
    """mutation CreateIssue($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue {"""
    + ISSUE_FIELDS
    + """    }
  }
}"""
)
