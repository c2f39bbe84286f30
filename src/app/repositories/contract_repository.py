"""Contract Repository Interface

Defines the contract for contract persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.contract import Contract, ContractId


class ContractRepository(ABC):
    """
    Repository interface for Contract persistence

    Contracts are looked up by their composite natural key.
    """

    @abstractmethod
    async def get_by_contract_id(self, contract_id: ContractId) -> Optional[Contract]:
        """
        Retrieve contract by natural key

        Args:
            contract_id: Composite contract id

        Returns:
            Contract if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_project(self, repo_full_name: str, provider: str) -> List[Contract]:
        """
        Retrieve all contracts of a project

        Args:
            repo_full_name: Project repository
            provider: Project provider

        Returns:
            List of contracts (any role)
        """
        pass
