# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# database access for a single resource:
#
#   user_service     — CRUD + windowed listing for User
#   post_service     — CRUD + windowed listing for Post (author/tag joined)
#   tag_service      — CRUD for Tag, scoped to its Post
#   comment_service  — CRUD for Comment, scoped to its Post
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.
