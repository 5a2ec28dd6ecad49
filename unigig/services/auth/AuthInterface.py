from abc import ABC, abstractmethod

class IAuthService(ABC):
    @abstractmethod
    async def sign_up(self, db, email: str, password: str, role, display_name: str):
        pass

    @abstractmethod
    async def sign_in(self, db, email: str, password: str):
        pass

    @abstractmethod
    async def sign_out(self, db, token: str) -> None:
        pass

    @abstractmethod
    async def current_session(self, db, token: str):
        pass
