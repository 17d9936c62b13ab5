from marshmallow import Schema, fields, post_dump


class EntityInfoSchema(Schema):
    id = fields.String()
    type = fields.String()
    name = fields.String()
    avatar_url = fields.String(allow_none=True)
    slug = fields.String()
    username = fields.String()

    @post_dump
    def drop_missing_handles(self, data, **kwargs):
        # users carry a username, businesses a slug; never both
        for key in ("slug", "username"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class FollowInputSchema(Schema):
    follower_id = fields.String(required=True)
    following_id = fields.String(required=True)


class FollowManyInputSchema(Schema):
    user_ids = fields.List(fields.String(), required=True)
