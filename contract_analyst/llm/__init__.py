from contract_analyst.llm.client_base import BaseChatClient
from contract_analyst.llm.factory import ChatTransportFactory
from contract_analyst.llm.transport import ChatTransport

__all__ = ["BaseChatClient", "ChatTransport", "ChatTransportFactory"]
