"""AgentQL query sent for every product page."""

PRODUCT_QUERY = """{
  product_details {
    product_name
    product_url
    prices[] {
      price
      quantity_range
    }
    images[]
  }
  supplier_information {
    name
    location
    years_in_business
  }
  product_attributes {
    Plug_Type[]
    warranty
    type
    function
    application
    place_of_origin
    power
    voltage
    after_sales_service
    power_source
    app_controlled
    capacity
    style
    brand_name
    model_number
    non_stick_material
    shape
    material
    controlling_mode
    operating_language
    private_mold
    temperature
    product_name
    item
    keywords
    color
    multi_function
    usage
    certification
    packaging_and_delivery {
      selling_units
      single_package_size
      single_gross_weight
    }
  }
  Sample_price
}"""

# Fast path: no screenshot, no waiting, no scrolling.
QUERY_PARAMS: dict[str, bool | int] = {
    "is_screenshot_enabled": False,
    "wait_for": 0,
    "is_scroll_to_bottom_enabled": False,
}
