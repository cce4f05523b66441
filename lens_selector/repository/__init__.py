from lens_selector.repository.exceptions import RepositoryError
from lens_selector.repository.git_repository import GitRepository, repo_local_path

__all__ = ["GitRepository", "RepositoryError", "repo_local_path"]
