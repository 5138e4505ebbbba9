"""Shared API constants: search document field names and ranking knobs."""

# Search document fields (pickup line, tag and user indices share id/userId/username/display_name)
ID_FIELD = "id"
TITLE_FIELD = "title"
CONTENT_FIELD = "content"
TAGS_FIELD = "tags"
NAME_FIELD = "name"
USER_ID_FIELD = "userId"
USERNAME_FIELD = "username"
DISPLAY_NAME_FIELD = "display_name"
VISIBLE_FIELD = "visible"
STARRED_FIELD = "starred"
UPDATED_AT_FIELD = "updatedAt"

# Reaction projection: membership sets and derived counters
STARRED_BY_USER_FIELD = "starredByUser"
UPVOTED_BY_USER_FIELD = "upvotedByUser"
DOWNVOTED_BY_USER_FIELD = "downvotedByUser"
NUMBER_OF_SUCCESSES_FIELD = "numberOfSuccesses"
NUMBER_OF_FAILURES_FIELD = "numberOfFailures"
NUMBER_OF_TRIES_FIELD = "numberOfTries"
SUCCESS_PERCENTAGE_FIELD = "successPercentage"

# Autocomplete (search_as_you_type) shingle size
MAX_SHINGLE_SIZE = 3

# Ranking
SORT_BY_NEW_SCALE_IN_DAYS = 1
SORT_BY_TRENDING_SCALE_IN_DAYS = 1
SORT_BY_TRENDING_UPVOTE_WEIGHT = 1.5
SORT_BY_BEST_OF_ALL_TIME_UPVOTE_WEIGHT = 1.5
RANDOM_SCORE_FIELD = "_seq_no"
