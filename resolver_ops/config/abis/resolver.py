"""
Resolver contract ABI.

Mirrors the callable surface of contracts/Resolver.sol as compiled by Hardhat:
a no-argument constructor, the best-path view and the exact-in swap.
"""

RESOLVER_ABI = [
    {
        "inputs": [],
        "stateMutability": "nonpayable",
        "type": "constructor",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "fromToken", "type": "address"},
            {"internalType": "address", "name": "toToken", "type": "address"},
            {"internalType": "uint256", "name": "amountIn", "type": "uint256"},
        ],
        "name": "findBestPathExactIn",
        "outputs": [
            {"internalType": "address", "name": "", "type": "address"},
            {"internalType": "address[]", "name": "", "type": "address[]"},
            {"internalType": "uint256", "name": "", "type": "uint256"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "router", "type": "address"},
            {"internalType": "uint256", "name": "amountIn", "type": "uint256"},
            {"internalType": "uint256", "name": "amountOutMin", "type": "uint256"},
            {"internalType": "address[]", "name": "path", "type": "address[]"},
            {"internalType": "address", "name": "to", "type": "address"},
            {"internalType": "uint256", "name": "deadline", "type": "uint256"},
        ],
        "name": "swapExactIn",
        "outputs": [
            {"internalType": "uint256[]", "name": "amounts", "type": "uint256[]"},
        ],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
