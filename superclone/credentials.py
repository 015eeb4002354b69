"""
Clone URL construction.

Private HTTPS clones carry the provider token in the URL authority; SSH and
public clones are used exactly as the provider reported them.
"""

from superclone.types.repos import Provider, Repository

_HTTPS_PREFIX = "https://"


def inject_credentials(
    url: str,
    provider: Provider,
    is_private: bool,
    token: str | None,
) -> str:
    """
    Embed an access token into a private repository's HTTPS URL.

    GitHub accepts the bare token as user name; GitLab expects the
    ``oauth2`` user with the token as password. Public repositories,
    non-HTTPS URLs and missing tokens leave the URL unchanged, in which case
    git reports the authentication failure itself.

    Args:
        url: HTTPS clone URL as reported by the provider
        provider: Platform the repository lives on
        is_private: Whether the repository is private
        token: Access token for the provider, if any

    Returns:
        The URL git should use
    """
    if not is_private or not url.startswith(_HTTPS_PREFIX):
        return url

    if not token:
        return url

    rest = url[len(_HTTPS_PREFIX):]
    if provider == Provider.GITLAB:
        return f"{_HTTPS_PREFIX}oauth2:{token}@{rest}"
    return f"{_HTTPS_PREFIX}{token}@{rest}"


def build_clone_url(
    https_url: str,
    ssh_url: str,
    provider: Provider,
    is_private: bool,
    token: str | None,
    use_ssh: bool = False,
) -> str:
    """Pick the transport URL; SSH wins and is never rewritten."""
    if use_ssh:
        return ssh_url
    return inject_credentials(https_url, provider, is_private, token)


def clone_url_for(repo: Repository, token: str | None, use_ssh: bool = False) -> str:
    return build_clone_url(
        repo.clone_url_https,
        repo.clone_url_ssh,
        repo.provider,
        repo.is_private,
        token,
        use_ssh=use_ssh,
    )
