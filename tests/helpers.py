"""GraphQL documents and small assertions shared by the API tests."""

REGISTER = """
mutation Register($input: UserInput!) {
  register(input: $input)
}
"""

AUTHENTICATE = """
mutation Authenticate($input: AuthInput!) {
  authenticate(input: $input) { token }
}
"""

CURRENT_USER = """
query { currentUser { id email name } }
"""

LIST_PROJECTS = """
query { listProjects { id name creator createdAt } }
"""

CREATE_PROJECT = """
mutation CreateProject($input: ProjectInput!) {
  createProject(input: $input) { id name creator createdAt }
}
"""

UPDATE_PROJECT = """
mutation UpdateProject($id: ID!, $input: ProjectUpdateInput!) {
  updateProject(id: $id, input: $input) { id name creator }
}
"""

DELETE_PROJECT = """
mutation DeleteProject($id: ID!) {
  deleteProject(id: $id)
}
"""

LIST_TASKS = """
query ListTasks($project: ID!) {
  listTasks(project: $project) { id name status project creator }
}
"""

CREATE_TASK = """
mutation CreateTask($input: TaskInput!) {
  createTask(input: $input) { id name status project creator createdAt }
}
"""

UPDATE_TASK = """
mutation UpdateTask($id: ID!, $input: TaskUpdateInput!, $status: Boolean!) {
  updateTask(id: $id, input: $input, status: $status) {
    id name status project creator
  }
}
"""

DELETE_TASK = """
mutation DeleteTask($id: ID!) {
  deleteTask(id: $id)
}
"""

MISSING_ID = "00000000-0000-0000-0000-000000000000"


def error_code(body: dict) -> str:
    """The extensions.code of the first GraphQL error in a response."""
    assert body.get("errors"), body
    return body["errors"][0]["extensions"]["code"]
