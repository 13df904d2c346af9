"""Add and remove user groups through action=userrights."""

import logging
from typing import Iterable, Optional

from .api_client import ApiClientProtocol
from .errors import MalformedResponseError
from .models import User, UserRightsOptions

logger = logging.getLogger(__name__)


class UserRightsChanger:
    """Changes the groups of a user.

    A change takes two requests: one to fetch a userrights token for the
    user, then the change itself. Nothing is retried; if the token is no
    longer valid by the second request the client's error propagates.
    """

    def __init__(self, api: ApiClientProtocol):
        self.api = api

    def get_token(self, user: User) -> str:
        """Fetch the userrights token tied to ``user``."""
        result = self.api.execute_read_request('query', {
            'list': 'users',
            'ustoken': 'userrights',
            'ususers': user.name,
        })

        try:
            return result['query']['users'][0]['userrightstoken']
        except (KeyError, IndexError, TypeError):
            raise MalformedResponseError('query', f"no userrights token for user {user.name!r}")

    def change(
        self,
        user: User,
        add: Iterable[str] = (),
        remove: Iterable[str] = (),
        options: Optional[UserRightsOptions] = None,
    ) -> bool:
        """
        Add and remove groups for a user.

        Returns True once the request is accepted; the resulting groups
        are not checked.
        """
        if options is None:
            options = UserRightsOptions()
        add = list(add)
        remove = list(remove)

        token = self.get_token(user)
        logger.info("Fetched userrights token for %s", user.name)

        params = {
            'user': user.name,
            'token': token,
        }
        if options.reason:
            params['reason'] = options.reason
        if add:
            params['add'] = '|'.join(add)
        if remove:
            params['remove'] = '|'.join(remove)

        logger.debug("Changing rights of %s: add=%s remove=%s", user.name, add, remove)
        self.api.execute_write_request('userrights', params)
        return True
