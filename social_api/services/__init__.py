# Services package.
#
# Each module exposes async functions that hold the business rules and
# database access for one entity:
#
#   user_service           — creation with profile + image, image reset,
#                            cascading delete
#   profile_service        — profile reads and pass-through updates
#   image_profile_service  — current profile image lookup / persistence
#   image_storage_service  — writes uploaded images to disk
#   post_service           — CRUD for Post
#   comment_service        — CRUD + paginated lookups for Comment
#   reaction_service       — one reaction per (user, post)
#
# All functions take an AsyncSession first; the ``get_db`` dependency owns
# the transaction. ``find_*`` lookups return None when nothing matches,
# ``get_*`` lookups and every write raise NotFoundError instead.
