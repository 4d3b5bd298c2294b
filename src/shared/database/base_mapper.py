import abc
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import inspect


TModel = TypeVar("TModel")
TEntity = TypeVar("TEntity")


class BaseEntityMapper(abc.ABC, Generic[TModel, TEntity]):
    """
    Table mapper between a domain model and its SQLAlchemy entity.

    Repositories are composed with a mapper instead of subclassing per table:
    the mapper names the entity class and knows both directions of the
    conversion.
    """

    entity_class: ClassVar[type]

    @staticmethod
    @abc.abstractmethod
    def to_entity(model_instance: TModel) -> TEntity:
        pass

    @staticmethod
    @abc.abstractmethod
    def to_model(entity: TEntity) -> TModel:
        pass

    def to_values(self, model_instance: TModel) -> dict[str, Any]:
        """Column values of the mapped entity, keyed by attribute name."""
        entity = self.to_entity(model_instance)
        return {
            attr.key: getattr(entity, attr.key)
            for attr in inspect(self.entity_class).column_attrs
        }
