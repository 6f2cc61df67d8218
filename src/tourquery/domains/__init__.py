"""Domain query definitions for hotels, restaurants, rentals and news."""

from tourquery.domains.car_rentals import (
    AgeRestrictions,
    CarRentalKeys,
    CarRentalSearchState,
    age_restrictions,
    book_car,
    car_categories_query,
    car_features_query,
    car_fuel_types_query,
    car_rental_detail_query,
    car_rental_keys,
    car_rental_search_query,
    insurance_options_query,
    rental_locations_query,
    rental_price_query,
)
from tourquery.domains.hotels import (
    HotelKeys,
    HotelSearchState,
    book_hotel,
    hotel_amenities_query,
    hotel_availability_query,
    hotel_detail_query,
    hotel_keys,
    hotel_search_query,
)
from tourquery.domains.news import (
    NewsKeys,
    NewsSearchState,
    featured_news_query,
    news_article_query,
    news_categories_query,
    news_keys,
    news_search_query,
    trending_tags_query,
)
from tourquery.domains.rentals import (
    RentalKeys,
    RentalSearchState,
    book_rental,
    rental_availability_query,
    rental_detail_query,
    rental_keys,
    rental_search_query,
)
from tourquery.domains.restaurants import (
    RestaurantKeys,
    RestaurantSearchState,
    debounced_restaurant_search,
    make_reservation,
    popular_cuisines_query,
    restaurant_availability_query,
    restaurant_categories_query,
    restaurant_detail_query,
    restaurant_keys,
    restaurant_reviews_query,
    restaurant_search_query,
)

__all__ = [
    # Hotels
    "HotelKeys",
    "HotelSearchState",
    "hotel_keys",
    "hotel_search_query",
    "hotel_detail_query",
    "hotel_amenities_query",
    "hotel_availability_query",
    "book_hotel",
    # Restaurants
    "RestaurantKeys",
    "RestaurantSearchState",
    "restaurant_keys",
    "restaurant_search_query",
    "restaurant_detail_query",
    "restaurant_categories_query",
    "popular_cuisines_query",
    "restaurant_reviews_query",
    "restaurant_availability_query",
    "make_reservation",
    "debounced_restaurant_search",
    # Holiday rentals
    "RentalKeys",
    "RentalSearchState",
    "rental_keys",
    "rental_search_query",
    "rental_detail_query",
    "rental_availability_query",
    "book_rental",
    # Car rentals
    "CarRentalKeys",
    "CarRentalSearchState",
    "AgeRestrictions",
    "car_rental_keys",
    "car_rental_search_query",
    "car_rental_detail_query",
    "rental_locations_query",
    "car_categories_query",
    "car_features_query",
    "car_fuel_types_query",
    "insurance_options_query",
    "rental_price_query",
    "book_car",
    "age_restrictions",
    # News
    "NewsKeys",
    "NewsSearchState",
    "news_keys",
    "news_search_query",
    "featured_news_query",
    "news_article_query",
    "news_categories_query",
    "trending_tags_query",
]
