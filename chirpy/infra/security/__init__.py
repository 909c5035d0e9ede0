from .credential_hasher import WerkzeugCredentialHasher

__all__ = ["WerkzeugCredentialHasher"]
