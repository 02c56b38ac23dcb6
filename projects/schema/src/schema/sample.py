"""Built-in sample schema."""

from schema.types import SpannerSchema

SAMPLE_SCHEMA: SpannerSchema = {
    "tables": [
        {
            "name": "Singers",
            "primaryKey": ["SingerId"],
            "columns": [
                {"name": "SingerId", "type": "INT64", "isNullable": False},
                {"name": "FirstName", "type": "STRING"},
                {"name": "LastName", "type": "STRING", "isNullable": False},
                {"name": "CreatedAt", "type": "TIMESTAMP", "isNullable": False},
            ],
        },
        {
            "name": "Albums",
            "primaryKey": ["SingerId", "AlbumId"],
            "columns": [
                {"name": "SingerId", "type": "INT64", "isNullable": False},
                {"name": "AlbumId", "type": "INT64", "isNullable": False},
                {"name": "AlbumTitle", "type": "STRING"},
                {"name": "ReleaseDate", "type": "DATE"},
            ],
            "interleavedIn": "Singers",
        },
    ],
    "foreignKeys": [
        {
            "name": "fk_albums_singers",
            "referencingTable": "Albums",
            "referencingColumns": ["SingerId"],
            "referencedTable": "Singers",
            "referencedColumns": ["SingerId"],
        },
    ],
}
