"""
GraphQL operations issued by the notification service

Field names (id, send_after, closed, visible, subject_id, subject_type,
affected_rows) are part of the persisted schema and must not change.
"""
from dataclasses import dataclass
from enum import Enum


class OperationKind(str, Enum):
    """GraphQL operation type"""
    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class GraphQLOperation:
    """A named GraphQL document"""
    kind: OperationKind
    name: str
    document: str


TEMPLATE_FIELDS = """
      id
      headings
      contents
      metadata
"""


GET_TEMPLATES_BY_IDS = GraphQLOperation(
    kind=OperationKind.QUERY,
    name="GetNotificationTemplatesByIds",
    document="""
query GetNotificationTemplatesByIds($where: notification_template_bool_exp!) {
  notification_template(where: $where) {%s  }
}
""" % TEMPLATE_FIELDS,
)


# On conflict only contents and headings are rewritten, never metadata
UPSERT_TEMPLATES = GraphQLOperation(
    kind=OperationKind.MUTATION,
    name="UpsertNotificationTemplates",
    document="""
mutation UpsertNotificationTemplates($objects: [notification_template_insert_input!]!) {
  insert_notification_template(
    objects: $objects,
    on_conflict: { constraint: notification_template_pkey, update_columns: [contents, headings] }
  ) {
    returning {%s    }
  }
}
""" % TEMPLATE_FIELDS,
)


CREATE_NOTIFICATIONS = GraphQLOperation(
    kind=OperationKind.MUTATION,
    name="CreateNotifications",
    document="""
mutation CreateNotifications($objects: [notification_insert_input!]!) {
  insert_notification(objects: $objects) {
    returning {
      id
    }
  }
}
""",
)


SEND_NOTIFICATIONS = GraphQLOperation(
    kind=OperationKind.MUTATION,
    name="SendNotifications",
    document="""
mutation SendNotifications($objects: [SendNotificationInput!]!) {
  send_notifications(objects: $objects) {
    success_count
    failure_count
    responses {
      success
      is_rate_limit
      client_name
      request_id
      message_id
      error
    }
  }
}
""",
)


CANCEL_NOTIFICATIONS = GraphQLOperation(
    kind=OperationKind.MUTATION,
    name="CancelNotifications",
    document="""
mutation CancelNotifications($where: notification_bool_exp!, $setValues: notification_set_input!) {
  update_notification(where: $where, _set: $setValues) {
    affected_rows
  }
}
""",
)


__all__ = [
    "OperationKind",
    "GraphQLOperation",
    "GET_TEMPLATES_BY_IDS",
    "UPSERT_TEMPLATES",
    "CREATE_NOTIFICATIONS",
    "SEND_NOTIFICATIONS",
    "CANCEL_NOTIFICATIONS",
]
