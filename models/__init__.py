from models.entity import Entity
from models.search_criterion import SearchCriterion
from models.record import Record
from models.entity_store import EntityStore

__all__ = ['Entity', 'SearchCriterion', 'Record', 'EntityStore']
