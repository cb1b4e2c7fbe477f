# shelf/hardcover/queries.py

BOOK_FIELDS = """
      id
      title
      subtitle
      description
      pages
      release_date
      slug
      image {
        url
      }
      contributions {
        author {
          name
        }
      }
"""

GET_BOOK_BY_ID_QUERY = """
  query GetBookById($id: Int!) {
    books(where: {id: {_eq: $id}}) {%s}
  }
""" % BOOK_FIELDS

GET_BOOKS_BY_IDS_QUERY = """
  query GetBooksByIds($ids: [Int!]!) {
    books(where: {id: {_in: $ids}}) {%s}
  }
""" % BOOK_FIELDS

GET_POPULAR_BOOKS_QUERY = """
  query GetPopularBooks($limit: Int!) {
    books(
      where: {canonical_id: {_is_null: true}}
      order_by: {users_count: desc}
      limit: $limit
    ) {%s}
  }
""" % BOOK_FIELDS

SEARCH_BOOKS_QUERY = """
  query SearchBooks($query: String!, $per_page: Int!) {
    search(query: $query, query_type: "Title", per_page: $per_page, page: 1) {
      results
    }
  }
"""

GET_AUTHOR_BY_ID_QUERY = """
  query GetAuthorById($id: Int!) {
    authors(where: {id: {_eq: $id}}) {
      id
      name
      bio
      cached_image
      image {
        url
      }
      location
      books_count
    }
  }
"""

GET_BOOKS_BY_AUTHOR_QUERY = """
  query GetBooksByAuthor($authorId: Int!) {
    books(
      where: {
        contributions: {author_id: {_eq: $authorId}},
        canonical_id: {_is_null: true}
      },
      order_by: {users_count: desc}
    ) {%s}
  }
""" % BOOK_FIELDS

# Curated IDs known to resolve; category queries against the live catalog time out
EXPLORE_CATEGORIES = {
    "trending": [427578, 340654, 432761, 430111, 379753, 266607],
    "highest_rated": [312460, 382700, 379760, 386446, 379217, 188628],
    "new_releases": [427578, 266607, 432478, 435002, 428889, 427825],
    "sci_fi_fantasy": [312460, 369692, 379217, 386446, 313448, 158268],
    "mystery": [359823, 432478, 428889, 426673],
    "romance": [340654, 430111, 435002, 391653],
    "non_fiction": [420320, 379753, 432761, 426958],
    "classics": [379760, 374328, 382700, 382698],
}
