import uuid

# Media parent used when the data type does not configure one
EMPTY_GUID = uuid.UUID(int=0)

# Acting user when no authenticated user is available
SUPER_USER_ID = "-1"

RAW_FIELD_PREFIX = "__Raw_"
