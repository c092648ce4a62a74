"""Constants for User model field names"""


class UserFields:
    """Field name constants for User documents"""
    NAME = "name"
    EMAIL = "email"
    AGE = "age"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
