from cloudprovision.api.swift.container import SwiftContainer
from cloudprovision.api.swift.service import SwiftService

__all__ = [
    "SwiftContainer",
    "SwiftService",
]
