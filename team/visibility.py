"""Which projects or hackathons a user may see: the ones they created or are on the team of."""


def member_entity_ids(memberships, user_id, entity_key):
    return {getattr(m, entity_key) for m in memberships if m.user_id == user_id}


def visible_entities(entities, memberships, user_id, entity_key):
    """
    Stable filter of ``entities`` down to those created by ``user_id`` or
    having a membership for ``user_id``.

    ``entity_key`` is the attribute on a membership that references its
    entity, e.g. ``'project_id'``.
    """
    joined = member_entity_ids(memberships or [], user_id, entity_key)
    return [e for e in entities if e.created_by_id == user_id or e.id in joined]


def is_visible_to(entity, memberships, user_id, entity_key):
    if entity.created_by_id == user_id:
        return True
    return entity.id in member_entity_ids(memberships or [], user_id, entity_key)
