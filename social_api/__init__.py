# Social Raccoon API: REST backend for users, profiles, posts, comments
# and reactions.
