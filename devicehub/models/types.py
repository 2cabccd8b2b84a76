# devicehub/models/types.py
from sqlalchemy import String, func
from sqlalchemy.types import UserDefinedType


class SpatialPoint(UserDefinedType):
    """
    Native POINT column (MySQL / MariaDB).

    Values travel as point-literal text: written through ST_GeomFromText,
    read back through ST_AsText.
    """

    cache_ok = True

    def get_col_spec(self, **kw):
        return "POINT"

    def bind_expression(self, bindvalue):
        return func.ST_GeomFromText(bindvalue, type_=self)

    def column_expression(self, col):
        return func.ST_AsText(col, type_=String())


# Spatial column where the store has one, plain text elsewhere (SQLite in tests)
PointText = String(100).with_variant(SpatialPoint(), "mysql", "mariadb")
