# Merchant Cart Service
