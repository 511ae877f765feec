from pydantic import BaseModel


class SubscriptionCounts(BaseModel):
    followers: int
    following: int


class FollowRequest(BaseModel):
    user_id: str
