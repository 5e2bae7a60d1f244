def in_bucket(user_id: int, percentage: int) -> bool:
    # plain modulo of the numeric id, no hashing step
    if user_id < 0:
        return False
    return user_id % 100 < percentage
