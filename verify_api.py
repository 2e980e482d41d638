"""Walks a running server through a full checkout.

    uvicorn app.main:app --port 8000
    python verify_api.py
"""
import requests
import json
import uuid

BASE_URL = "http://localhost:8000/api"
USERNAME = f"verify_{uuid.uuid4().hex[:8]}"
PASSWORD = "SecurePassword123!"

def print_response(name, response):
    print(f"--- {name} ---")
    print(f"Status: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    print("\n")

def run_verification():
    # Session keeps the auth cookie between calls
    http = requests.Session()

    print("1. Registering User...")
    resp = http.post(f"{BASE_URL}/register", json={
        "username": USERNAME,
        "password": PASSWORD,
        "email": f"{USERNAME}@example.com",
        "name": "Verify User",
    })
    print_response("Register", resp)
    if resp.status_code != 201:
        print("Registration failed, aborting.")
        return
    user_id = resp.json()["id"]

    print("2. Searching Products...")
    resp = http.get(f"{BASE_URL}/products", params={"search": "smartphone"})
    print_response("Search Products", resp)
    product_id = resp.json()[0]["id"]

    print("3. Adding to Cart...")
    resp = http.post(f"{BASE_URL}/cart/items", json={"product_id": product_id, "quantity": 1})
    print_response("Add to Cart", resp)
    cart_id = resp.json()["cart_id"]

    print("4. Calculating Shipping...")
    resp = http.post(f"{BASE_URL}/shipping/calculate", json={"cart_id": cart_id, "zipcode": "01001-000"})
    print_response("Shipping", resp)
    shipping_method = resp.json()["best_option"]["code"]

    print("5. Creating Order...")
    resp = http.post(f"{BASE_URL}/orders", json={
        "cart_id": cart_id,
        "shipping_address": "Rua Teste, 123",
        "shipping_city": "Sao Paulo",
        "shipping_state": "SP",
        "shipping_zipcode": "01001-000",
        "shipping_method": shipping_method,
        "payment_method": "pix",
    })
    print_response("Create Order", resp)
    if resp.status_code != 201:
        print("Order failed, aborting.")
        return
    order_id = resp.json()["id"]

    print("6. Processing Payment...")
    resp = http.post(f"{BASE_URL}/payment/process", json={"order_id": order_id, "payment_method": "pix"})
    print_response("Payment", resp)

    print("7. Order History and Recommendations...")
    print_response("Orders", http.get(f"{BASE_URL}/user/{user_id}/orders"))
    print_response("Recommendations", http.get(f"{BASE_URL}/recommendations", params={"user_id": user_id}))

if __name__ == "__main__":
    run_verification()
