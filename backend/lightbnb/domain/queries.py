"""Fixed SQL statements used by the record accessors.

Placeholders are PostgreSQL-style ``$N``; the store rewrites them for the
driver in use.
"""

from __future__ import annotations

USER_BY_EMAIL = """
SELECT * FROM users
WHERE LOWER(users.email) = LOWER($1);
"""

USER_BY_ID = """
SELECT * FROM users
WHERE users.id = $1;
"""

# Inserts only when no case-insensitive match exists; the unique index on
# LOWER(email) rejects concurrent duplicates that pass the NOT EXISTS check.
INSERT_USER = """
INSERT INTO users (name, email, password)
SELECT $1, $2, $3
WHERE NOT EXISTS (
  SELECT 1 FROM users WHERE LOWER(users.email) = LOWER($2)
)
RETURNING *;
"""

RESERVATIONS_FOR_GUEST = """
SELECT reservations.*,
  properties.title,
  properties.cost_per_night,
  properties.thumbnail_photo_url,
  properties.number_of_bedrooms,
  properties.number_of_bathrooms,
  properties.parking_spaces,
  avg(property_reviews.rating) AS average_rating
FROM reservations
JOIN properties ON reservations.property_id = properties.id
LEFT JOIN property_reviews ON properties.id = property_reviews.property_id
WHERE reservations.guest_id = $1
GROUP BY properties.id, reservations.id
ORDER BY reservations.start_date
LIMIT $2;
"""

PROPERTY_COLUMNS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "street",
    "city",
    "province",
    "post_code",
    "country",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
)

INSERT_PROPERTY = (
    f"INSERT INTO properties ({', '.join(PROPERTY_COLUMNS)})\n"
    f"VALUES ({', '.join(f'${i}' for i in range(1, len(PROPERTY_COLUMNS) + 1))})\n"
    "RETURNING *;"
)
