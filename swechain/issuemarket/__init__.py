"""Issue auctions and bids: types, keeper, message and query servers, and app module."""